from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from scc.models import Promocao, ProdutoCadastro
from scc.repositories.base import BaseRepository


class PromocoesRepository(BaseRepository[Promocao]):
    def __init__(self, db: Session):
        super().__init__(Promocao, db)

    def list_vigentes(self, hoje: date, termo: Optional[str] = None, limit: Optional[int] = None) -> List[Tuple[Promocao, Optional[ProdutoCadastro]]]:
        """Promoções com validade a partir de hoje, com dados do cadastro de produtos."""
        query = (
            self.db.query(self.model, ProdutoCadastro)
            .outerjoin(ProdutoCadastro, ProdutoCadastro.codproduto == self.model.c_codprod)
            .filter(self.model.c_validade >= hoje)
        )
        if termo:
            like = f"%{termo}%"
            query = query.filter(or_(self.model.c_codprod.like(like), ProdutoCadastro.produto.ilike(like)))
        query = query.order_by(self.model.c_validade.asc(), ProdutoCadastro.produto.asc())
        if limit:
            query = query.limit(limit)
        return query.all()
