from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from scc.models import Vendedor, Filial, ComissaoVendedor, VendedorMeta
from scc.repositories.base import BaseRepository
from scc.utils.competencia import competencia_range

# Lojas ativas na tabela de filiais do ERP
CODIGOS_LOJAS = [f"{n:02d}" for n in range(0, 13)]


class VendedoresRepository(BaseRepository[Vendedor]):
    def __init__(self, db: Session):
        super().__init__(Vendedor, db)

    def list(self) -> List[Vendedor]:
        return self.db.query(self.model).order_by(self.model.vendedor.asc()).all()

    def list_lojas(self) -> List[Filial]:
        return (
            self.db.query(Filial)
            .filter(Filial.c_codigo.in_(CODIGOS_LOJAS))
            .order_by(Filial.c_codigo.asc())
            .all()
        )


class ComissaoVendedorRepository(BaseRepository[ComissaoVendedor]):
    def __init__(self, db: Session):
        super().__init__(ComissaoVendedor, db)

    def _joined(self):
        return (
            self.db.query(self.model, Vendedor, Filial)
            .outerjoin(Vendedor, Vendedor.codvendedor == self.model.codvendedor)
            .outerjoin(Filial, Filial.c_codigo == self.model.codloja)
        )

    def list_joined(self) -> List[Tuple[ComissaoVendedor, Optional[Vendedor], Optional[Filial]]]:
        return self._joined().order_by(Vendedor.vendedor.asc(), self.model.id.asc()).all()

    def get_joined(self, id: int) -> Optional[Tuple[ComissaoVendedor, Optional[Vendedor], Optional[Filial]]]:
        return self._joined().filter(self.model.id == id).first()


class VendedorMetaRepository(BaseRepository[VendedorMeta]):
    def __init__(self, db: Session):
        super().__init__(VendedorMeta, db)

    def _competencia_filter(self, competencia: date):
        inicio, fim = competencia_range(competencia)
        return self.model.competencia.between(inicio, fim)

    def list_competencia(self, competencia: date) -> List[Tuple[VendedorMeta, Optional[Vendedor]]]:
        return (
            self.db.query(self.model, Vendedor)
            .outerjoin(Vendedor, Vendedor.codvendedor == self.model.codvendedor)
            .filter(self._competencia_filter(competencia))
            .order_by(Vendedor.vendedor.asc(), self.model.codvendedor.asc())
            .all()
        )

    def find(self, codvendedor: str, competencia: date) -> Optional[VendedorMeta]:
        return (
            self.db.query(self.model)
            .filter(self.model.codvendedor == codvendedor, self._competencia_filter(competencia))
            .first()
        )

    def list_models(self, competencia: date) -> List[VendedorMeta]:
        return self.db.query(self.model).filter(self._competencia_filter(competencia)).all()

    def delete_competencia(self, competencia: date) -> int:
        affected = (
            self.db.query(self.model)
            .filter(self._competencia_filter(competencia))
            .delete(synchronize_session="fetch")
        )
        self.db.flush()
        return affected
