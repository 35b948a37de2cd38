from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from scc.models import Modulo, NivelAcesso, PermissaoNivel
from scc.repositories.base import BaseRepository


class ModulosRepository(BaseRepository[Modulo]):
    def __init__(self, db: Session):
        super().__init__(Modulo, db)

    def list(self) -> List[Modulo]:
        return self.db.query(self.model).order_by(self.model.ordem.asc(), self.model.nome.asc()).all()

    def get_by_rota(self, rota: str) -> Optional[Modulo]:
        """
        Obtém o módulo pela chave de rota.

        A barra inicial é ignorada dos dois lados ('/produtos' == 'produtos').
        """
        chave = (rota or "").lstrip("/")
        candidatos = {chave, f"/{chave}"}
        return self.db.query(self.model).filter(self.model.rota.in_(candidatos)).first()


class NiveisRepository(BaseRepository[NivelAcesso]):
    def __init__(self, db: Session):
        super().__init__(NivelAcesso, db)

    def list(self) -> List[NivelAcesso]:
        return self.db.query(self.model).order_by(self.model.codigo.asc()).all()


class PermissoesRepository(BaseRepository[PermissaoNivel]):
    def __init__(self, db: Session):
        super().__init__(PermissaoNivel, db)

    def list_by_nivel(self, codigo_nivel: str) -> List[PermissaoNivel]:
        return (
            self.db.query(self.model)
            .filter(self.model.codigo_nivel == codigo_nivel)
            .order_by(self.model.id_modulo.asc())
            .all()
        )

    def find(self, codigo_nivel: str, id_modulo: int) -> Optional[PermissaoNivel]:
        return self.get((codigo_nivel, id_modulo))

    def save(self, codigo_nivel: str, permissao: Dict[str, Any]) -> None:
        """Grava a permissão do par (nível, módulo), substituindo a existente."""
        values = {
            "codigo_nivel": codigo_nivel,
            "id_modulo": permissao["id_modulo"],
            "visualizar": bool(permissao.get("visualizar", False)),
            "incluir": bool(permissao.get("incluir", False)),
            "editar": bool(permissao.get("editar", False)),
            "excluir": bool(permissao.get("excluir", False)),
        }
        self.upsert(values, index_elements=["codigo_nivel", "id_modulo"])
