from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import or_
from sqlalchemy.orm import Session

from scc.models import ProdutoCadastro, ProdutoFora, ProdutoEtiqueta
from scc.repositories.base import BaseRepository
from scc.utils.competencia import competencia_range


class ProdutosRepository(BaseRepository[ProdutoCadastro]):
    """Consultas ao cadastro de produtos do ERP."""

    def __init__(self, db: Session):
        super().__init__(ProdutoCadastro, db)

    def exists(self, codproduto: str) -> bool:
        return self.db.query(self.model.codproduto).filter(self.model.codproduto == codproduto).first() is not None

    def search(self, termo: str, limit: int = 50) -> List[ProdutoCadastro]:
        like = f"%{termo}%"
        return (
            self.db.query(self.model)
            .filter(or_(self.model.codproduto.like(like), self.model.produto.ilike(like)))
            .order_by(self.model.produto.asc())
            .limit(limit)
            .all()
        )


class ProdutoForaRepository(BaseRepository[ProdutoFora]):
    def __init__(self, db: Session):
        super().__init__(ProdutoFora, db)

    def list_competencia(self, mes_ano: date) -> List[Tuple[ProdutoFora, Optional[ProdutoCadastro]]]:
        inicio, fim = competencia_range(mes_ano)
        return (
            self.db.query(self.model, ProdutoCadastro)
            .outerjoin(ProdutoCadastro, ProdutoCadastro.codproduto == self.model.codproduto)
            .filter(self.model.mes_ano.between(inicio, fim))
            .order_by(self.model.codproduto.asc())
            .all()
        )


class ProdutoEtiquetaRepository(BaseRepository[ProdutoEtiqueta]):
    def __init__(self, db: Session):
        super().__init__(ProdutoEtiqueta, db)

    def list_competencia(self, mes_ano: date) -> List[Tuple[ProdutoEtiqueta, Optional[ProdutoCadastro]]]:
        inicio, fim = competencia_range(mes_ano)
        return (
            self.db.query(self.model, ProdutoCadastro)
            .outerjoin(ProdutoCadastro, ProdutoCadastro.codproduto == self.model.codproduto)
            .filter(self.model.mes_ano.between(inicio, fim))
            .order_by(self.model.codproduto.asc())
            .all()
        )
