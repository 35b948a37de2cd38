from typing import List
from sqlalchemy.orm import Session, selectinload

from scc.models import ComissaoRange, ComissaoPercentual
from scc.repositories.base import BaseRepository


class ComissaoRangeRepository(BaseRepository[ComissaoRange]):
    def __init__(self, db: Session):
        super().__init__(ComissaoRange, db)

    def list(self) -> List[ComissaoRange]:
        return (
            self.db.query(self.model)
            .options(selectinload(self.model.percentuais))
            .order_by(self.model.faixa_min.asc())
            .all()
        )


class ComissaoPercentualRepository(BaseRepository[ComissaoPercentual]):
    def __init__(self, db: Session):
        super().__init__(ComissaoPercentual, db)
