from typing import Optional, List
from pydantic import Field

from scc.schemas.base import BaseSchema


class ModuloBase(BaseSchema):
    nome: str = Field(min_length=1)
    rota: str = Field(min_length=1)
    icone: Optional[str] = None
    ordem: int = 0
    ativo: bool = True


class ModuloCreate(ModuloBase):
    """Esquema para criação de módulos."""


class ModuloUpdate(BaseSchema):
    """Esquema para atualização parcial de módulos."""
    nome: Optional[str] = None
    rota: Optional[str] = None
    icone: Optional[str] = None
    ordem: Optional[int] = None
    ativo: Optional[bool] = None


class ModuloSchema(ModuloBase):
    id: int


class NivelAcessoCreate(BaseSchema):
    codigo: str = Field(min_length=1, max_length=2)
    descricao: str = Field(min_length=1)
    ativo: bool = True


class NivelAcessoUpdate(BaseSchema):
    descricao: Optional[str] = None
    ativo: Optional[bool] = None


class NivelAcessoSchema(NivelAcessoCreate):
    pass


class PermissaoItem(BaseSchema):
    """Permissões de um nível sobre um módulo."""
    id_modulo: int
    visualizar: bool = False
    incluir: bool = False
    editar: bool = False
    excluir: bool = False


class PermissaoSchema(PermissaoItem):
    codigo_nivel: str
    modulo_nome: Optional[str] = None
    modulo_rota: Optional[str] = None


class PermissaoModuloResponse(BaseSchema):
    modulo: str
    acao: str
    permitido: bool
