import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Union

from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import NoFieldsToUpdate, NotFoundError, ValidationError
from scc.models import Modulo, NivelAcesso, PermissaoNivel
from scc.repositories import ModulosRepository, NiveisRepository, PermissoesRepository
from scc.schemas.controle_acesso import (
    ModuloCreate,
    ModuloUpdate,
    NivelAcessoCreate,
    NivelAcessoUpdate,
    PermissaoItem,
)

logger = logging.getLogger("uvicorn")


class Acao(str, Enum):
    """Ações controladas por permissão; o valor é a coluna correspondente."""
    VIEW = "visualizar"
    CREATE = "incluir"
    EDIT = "editar"
    DELETE = "excluir"


@dataclass(frozen=True)
class Found:
    allowed: bool


@dataclass(frozen=True)
class NotConfigured:
    pass


PermissionLookup = Union[Found, NotConfigured]


class ControleAcessoService:
    """
    Avaliação de permissões e cadastro de módulos, níveis e permissões.

    Uma combinação (nível, módulo, ação) sem linha de permissão é negada.
    """

    def __init__(self, db: Session):
        self.db = db
        self.modulos = ModulosRepository(db)
        self.niveis = NiveisRepository(db)
        self.permissoes = PermissoesRepository(db)

    # Avaliação de permissões

    def lookup_permission(self, nivel: str, module_key: str, acao: Acao) -> PermissionLookup:
        """
        Consulta a permissão de um nível sobre um módulo.

        Returns:
            Found(allowed) quando existe linha de permissão para o par
            (nível, módulo); NotConfigured quando o módulo ou a linha não existem.
            Módulos inativos são sempre Found(False).
        """
        modulo = self.modulos.get_by_rota(module_key)
        if not modulo:
            return NotConfigured()
        permissao = self.permissoes.find(nivel, modulo.id)
        if not permissao:
            return NotConfigured()
        if not modulo.ativo:
            return Found(False)
        return Found(bool(getattr(permissao, Acao(acao).value)))

    def get_module_permission(self, nivel: str, module_key: str, acao: Acao) -> bool:
        result = self.lookup_permission(nivel, module_key, acao)
        if isinstance(result, Found):
            return result.allowed
        return False

    # Módulos

    def list_modulos(self) -> List[Modulo]:
        return self.modulos.list()

    def create_modulo(self, dados: ModuloCreate) -> Modulo:
        with transaction(self.db):
            modulo = self.modulos.create(dados)
        logger.info(f"Módulo criado: {modulo.rota}")
        return modulo

    def update_modulo(self, id: int, dados: ModuloUpdate) -> Modulo:
        values = dados.model_dump(exclude_unset=True)
        if not values:
            raise NoFieldsToUpdate()
        with transaction(self.db):
            modulo = self.modulos.get(id)
            if not modulo:
                raise NotFoundError("Módulo não encontrado")
            modulo = self.modulos.update(modulo, values)
        return modulo

    def delete_modulo(self, id: int) -> None:
        with transaction(self.db):
            if not self.modulos.delete(id):
                raise NotFoundError("Módulo não encontrado")
        logger.info(f"Módulo {id} excluído")

    # Níveis de acesso

    def list_niveis(self) -> List[NivelAcesso]:
        return self.niveis.list()

    def create_nivel(self, dados: NivelAcessoCreate) -> NivelAcesso:
        with transaction(self.db):
            nivel = self.niveis.create(dados)
        logger.info(f"Nível de acesso criado: {nivel.codigo}")
        return nivel

    def update_nivel(self, codigo: str, dados: NivelAcessoUpdate) -> NivelAcesso:
        values = dados.model_dump(exclude_unset=True)
        if not values:
            raise NoFieldsToUpdate()
        with transaction(self.db):
            nivel = self.niveis.get(codigo)
            if not nivel:
                raise NotFoundError("Nível de acesso não encontrado")
            nivel = self.niveis.update(nivel, values)
        return nivel

    def delete_nivel(self, codigo: str) -> None:
        with transaction(self.db):
            if not self.niveis.delete(codigo):
                raise NotFoundError("Nível de acesso não encontrado")
        logger.info(f"Nível de acesso {codigo} excluído")

    # Permissões

    def list_permissoes(self, codigo_nivel: str) -> List[PermissaoNivel]:
        return self.permissoes.list_by_nivel(codigo_nivel)

    def save_permissoes(self, codigo_nivel: str, itens: List[PermissaoItem]) -> List[PermissaoNivel]:
        """
        Grava as permissões de um nível, uma linha por módulo.

        Tudo ou nada: se algum módulo não existir, nenhuma linha é gravada.
        """
        with transaction(self.db):
            if not self.niveis.get(codigo_nivel):
                raise NotFoundError("Nível de acesso não encontrado")
            for item in itens:
                if not self.modulos.get(item.id_modulo):
                    raise ValidationError("Formato de permissões inválido", details=f"Módulo {item.id_modulo} não encontrado")
                self.permissoes.save(codigo_nivel, item.model_dump())
        logger.info(f"Permissões do nível {codigo_nivel} atualizadas ({len(itens)} módulos)")
        return self.permissoes.list_by_nivel(codigo_nivel)
