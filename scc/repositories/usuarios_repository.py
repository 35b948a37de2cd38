from typing import Iterable, Optional
from sqlalchemy.orm import Session

from scc.models import UsuarioCredencial
from scc.repositories.base import BaseRepository


class UsuariosRepository(BaseRepository[UsuarioCredencial]):
    def __init__(self, db: Session):
        super().__init__(UsuarioCredencial, db)

    def find_by_credentials(self, usuario: str, senha_hash: str, niveis: Iterable[str]) -> Optional[UsuarioCredencial]:
        """Busca o usuário pelo nome e hash da senha, restrito aos níveis permitidos no login."""
        return (
            self.db.query(self.model)
            .filter(
                self.model.usuario == usuario,
                self.model.senha == senha_hash,
                self.model.nivel.in_(list(niveis)),
            )
            .first()
        )
