from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session, Query

from scc.models import AutorizacaoCompra
from scc.repositories.base import BaseRepository


class AutorizacaoCompraRepository(BaseRepository[AutorizacaoCompra]):
    def __init__(self, db: Session):
        super().__init__(AutorizacaoCompra, db)

    def _filtered(
        self,
        usuario: Optional[str] = None,
        loja: Optional[str] = None,
        setor: Optional[str] = None,
        busca: Optional[str] = None,
        data_inicio=None,
        data_fim=None,
    ) -> Query:
        query = self.db.query(self.model)
        if usuario is not None:
            query = query.filter(self.model.usuario == usuario)
        if loja:
            query = query.filter(self.model.loja == loja)
        if setor:
            query = query.filter(self.model.setor == setor)
        if busca:
            termo = f"%{busca}%"
            query = query.filter(or_(self.model.usuario.ilike(termo), self.model.fornecedor.ilike(termo)))
        if data_inicio:
            query = query.filter(self.model.data_criacao >= data_inicio)
        if data_fim:
            query = query.filter(self.model.data_criacao <= data_fim)
        return query

    def list_page(self, page: int = 1, limit: int = 10, **filters: Any) -> Tuple[List[AutorizacaoCompra], int]:
        """
        Lista autorizações filtradas, da mais recente para a mais antiga.

        Returns:
            Tupla (registros da página, total de registros do filtro)
        """
        query = self._filtered(**filters)
        total = query.count()
        offset = (max(page, 1) - 1) * limit
        rows = (
            query.order_by(self.model.data_criacao.desc(), self.model.hora_criacao.desc(), self.model.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def update_where(self, id: int, values: Dict[str, Any], *conditions) -> int:
        """
        UPDATE parametrizado com condições extras; retorna linhas afetadas.

        As condições entram no mesmo comando, de modo que a checagem do estado
        e a alteração acontecem de forma atômica no banco.
        """
        query = self.db.query(self.model).filter(self.model.id == id, *conditions)
        affected = query.update(values, synchronize_session="fetch")
        self.db.flush()
        return affected
