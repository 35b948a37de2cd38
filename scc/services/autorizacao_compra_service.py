import logging
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from scc.config import Settings, get_settings
from scc.db import transaction
from scc.errors import (
    AlreadyApproved,
    AlreadyReleased,
    ControladoriaRequired,
    Forbidden,
    NoFieldsToUpdate,
    NotFoundError,
)
from scc.models import AutorizacaoCompra
from scc.repositories import AutorizacaoCompraRepository
from scc.schemas.autorizacao_compra import (
    AutorizacaoCompraCreate,
    AutorizacaoCompraFiltros,
    AutorizacaoCompraUpdate,
)

logger = logging.getLogger("uvicorn")

# Colunas obrigatórias: null enviado explicitamente é ignorado na atualização
_REQUIRED_FIELDS = ("loja", "setor", "fornecedor", "valor")


class AutorizacaoCompraService:
    """
    Fluxo de autorização de compra em duas etapas.

    Estados:
        criada -> autorizada pela controladoria -> autorizada pela diretoria (liberada)

    A autorização da controladoria pode ser revertida enquanto a diretoria
    não tiver aprovado. Cada transição é um UPDATE condicionado ao estado
    esperado; quando nenhuma linha é afetada o registro é relido para
    distinguir "não encontrado" de "estado inválido".
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()
        self.repo = AutorizacaoCompraRepository(db)

    def _get_or_404(self, id: int) -> AutorizacaoCompra:
        autorizacao = self.repo.get(id)
        if not autorizacao:
            raise NotFoundError("Autorização não encontrada")
        return autorizacao

    def is_privileged(self, nivel: str) -> bool:
        return nivel in self.settings.privileged_levels

    def create(self, dados: AutorizacaoCompraCreate, requester: str) -> AutorizacaoCompra:
        """Cria a autorização sem aprovações, com data e hora do servidor."""
        agora = datetime.now()
        values = dados.model_dump()
        values.update(
            usuario=requester,
            data_criacao=agora.date(),
            hora_criacao=agora.time().replace(microsecond=0),
            autorizado_controladoria=False,
            autorizado_diretoria=False,
        )
        with transaction(self.db):
            autorizacao = self.repo.create(values)
        logger.info(f"Autorização de compra {autorizacao.id} criada por {requester}")
        return autorizacao

    def list_for(self, usuario: str, nivel: str, filtros: AutorizacaoCompraFiltros) -> Tuple[List[AutorizacaoCompra], int]:
        """
        Lista as autorizações visíveis para o usuário.

        Níveis privilegiados veem todos os registros e podem filtrar por loja,
        setor, busca e período; os demais veem apenas os próprios pedidos.
        """
        if self.is_privileged(nivel):
            return self.repo.list_page(
                page=filtros.page,
                limit=filtros.limit,
                loja=filtros.loja,
                setor=filtros.setor,
                busca=filtros.busca,
                data_inicio=filtros.data_inicio,
                data_fim=filtros.data_fim,
            )
        return self.repo.list_page(page=filtros.page, limit=filtros.limit, usuario=usuario)

    def get(self, id: int) -> AutorizacaoCompra:
        return self._get_or_404(id)

    def approve_controladoria(self, id: int, approver: str) -> AutorizacaoCompra:
        with transaction(self.db):
            affected = self.repo.update_where(
                id,
                {
                    "autorizado_controladoria": True,
                    "data_autorizacao_controladoria": datetime.now().date(),
                    "usuario_controladoria": approver,
                },
            )
            if not affected:
                raise NotFoundError("Autorização não encontrada")
        logger.info(f"Autorização {id} aprovada pela controladoria ({approver})")
        return self._get_or_404(id)

    def approve_diretoria(self, id: int, approver: str) -> AutorizacaoCompra:
        with transaction(self.db):
            affected = self.repo.update_where(
                id,
                {
                    "autorizado_diretoria": True,
                    "data_autorizacao_diretoria": datetime.now().date(),
                    "usuario_diretoria": approver,
                },
                AutorizacaoCompra.autorizado_controladoria.is_(True),
            )
            if not affected:
                self._get_or_404(id)
                raise ControladoriaRequired()
        logger.info(f"Autorização {id} liberada pela diretoria ({approver})")
        return self._get_or_404(id)

    def revert_controladoria(self, id: int) -> AutorizacaoCompra:
        with transaction(self.db):
            affected = self.repo.update_where(
                id,
                {
                    "autorizado_controladoria": False,
                    "data_autorizacao_controladoria": None,
                    "usuario_controladoria": None,
                },
                AutorizacaoCompra.autorizado_diretoria.is_(False),
            )
            if not affected:
                self._get_or_404(id)
                raise AlreadyReleased()
        logger.info(f"Autorização da controladoria revertida na autorização {id}")
        return self._get_or_404(id)

    def update(self, id: int, dados: AutorizacaoCompraUpdate) -> AutorizacaoCompra:
        """
        Atualização parcial com os campos enviados.

        Raises:
            NoFieldsToUpdate: nenhum campo enviado
            NotFoundError: registro inexistente
        """
        values = {
            k: v for k, v in dados.model_dump(exclude_unset=True).items()
            if not (k in _REQUIRED_FIELDS and v is None)
        }
        if not values:
            raise NoFieldsToUpdate()
        with transaction(self.db):
            if not self.repo.update_where(id, values):
                raise NotFoundError("Autorização não encontrada")
        return self._get_or_404(id)

    def delete(self, id: int, requester: str) -> bool:
        """
        Exclui a autorização do solicitante enquanto não houver aprovação.

        Raises:
            NotFoundError: registro inexistente
            Forbidden: o solicitante não é o autor do pedido
            AlreadyApproved: alguma etapa de aprovação já foi registrada
        """
        with transaction(self.db):
            autorizacao = self._get_or_404(id)
            if autorizacao.usuario != requester:
                raise Forbidden("Apenas o solicitante pode excluir a autorização")
            if autorizacao.possui_aprovacao:
                raise AlreadyApproved("Autorização já aprovada não pode ser excluída")
            self.db.delete(autorizacao)
            self.db.flush()
        logger.info(f"Autorização {id} excluída por {requester}")
        return True
