from datetime import date, time
from typing import Optional, List
from pydantic import Field

from scc.schemas.base import BaseSchema


class AutorizacaoCompraCreate(BaseSchema):
    """Esquema para criação de autorizações de compra."""
    loja: str = Field(min_length=1, max_length=2)
    setor: str = Field(min_length=1)
    fornecedor: str = Field(min_length=1)
    valor: float = Field(gt=0)
    observacao: Optional[str] = None


class AutorizacaoCompraUpdate(BaseSchema):
    """Atualização parcial: somente os campos enviados são alterados."""
    loja: Optional[str] = Field(default=None, min_length=1, max_length=2)
    setor: Optional[str] = Field(default=None, min_length=1)
    fornecedor: Optional[str] = Field(default=None, min_length=1)
    valor: Optional[float] = Field(default=None, gt=0)
    observacao: Optional[str] = None


class AutorizacaoCompraSchema(BaseSchema):
    id: int
    loja: str
    setor: str
    fornecedor: str
    valor: float
    observacao: Optional[str] = None
    usuario: str
    data_criacao: date
    hora_criacao: time
    autorizado_controladoria: bool
    data_autorizacao_controladoria: Optional[date] = None
    usuario_controladoria: Optional[str] = None
    autorizado_diretoria: bool
    data_autorizacao_diretoria: Optional[date] = None
    usuario_diretoria: Optional[str] = None
    liberada: bool


class AutorizacaoCompraFiltros(BaseSchema):
    """Filtros da listagem; aplicados apenas para níveis privilegiados."""
    loja: Optional[str] = None
    setor: Optional[str] = None
    busca: Optional[str] = None
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    page: int = 1
    limit: int = 10


class AutorizacaoCompraLista(BaseSchema):
    dados: List[AutorizacaoCompraSchema]
    total: int
