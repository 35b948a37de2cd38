from typing import Optional

from scc.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Credenciais enviadas no login."""
    usuario: Optional[str] = None
    senha: Optional[str] = None


class LoginResponse(BaseSchema):
    usuario: str
    codusuario: str
    nivel: str
    token: str


class VerificarResponse(BaseSchema):
    autenticado: bool
    usuario: str
    nivel: str
