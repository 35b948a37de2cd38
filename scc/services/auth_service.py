import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

import jwt
from sqlalchemy.orm import Session

from scc.config import Settings, get_settings
from scc.errors import InvalidCredentials, InvalidOrExpiredToken, ValidationError
from scc.repositories import UsuariosRepository

logger = logging.getLogger("uvicorn")


@dataclass(frozen=True)
class Identity:
    """
    Identidade do usuário autenticado, reconstruída a cada requisição a
    partir do token e passada explicitamente aos handlers e serviços.
    """
    usuario: str
    codusuario: str
    nivel: str


def hash_password(usuario: str, senha: str) -> str:
    """Hash armazenado na view de credenciais: md5(USUARIO + senha) em hexadecimal."""
    return hashlib.md5(f"{usuario.upper()}{senha}".encode("utf-8")).hexdigest()


def create_token(identity: Identity, issued_at: Optional[datetime] = None, settings: Optional[Settings] = None) -> str:
    """
    Gera o token JWT de sessão com a identidade e o nível do usuário.

    Args:
        identity: Identidade a embutir no token
        issued_at: Momento de emissão (padrão: agora, em UTC)
        settings: Configurações (padrão: get_settings())

    Returns:
        Token assinado
    """
    settings = settings or get_settings()
    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        "usuario": identity.usuario,
        "codusuario": identity.codusuario,
        "nivel": identity.nivel,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + timedelta(hours=settings.token_expire_hours)).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Optional[Settings] = None) -> Identity:
    """
    Valida assinatura e expiração do token.

    Raises:
        InvalidOrExpiredToken: token expirado, adulterado ou sem as claims esperadas
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        logger.warning("Token expirado")
        raise InvalidOrExpiredToken()
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token inválido: {str(e)}")
        raise InvalidOrExpiredToken()

    try:
        return Identity(
            usuario=str(payload["usuario"]),
            codusuario=str(payload["codusuario"]),
            nivel=str(payload["nivel"]),
        )
    except KeyError:
        raise InvalidOrExpiredToken()


class AuthService:
    """
    Serviço de autenticação de usuários.

    Valida as credenciais contra a view do ERP e emite o token de sessão.
    Não mantém estado no servidor.
    """

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Dict[str, Any]:
        """
        Autentica um usuário.

        Args:
            username: Nome de usuário (comparado em maiúsculas)
            password: Senha em texto puro

        Returns:
            Dicionário com usuario, codusuario, nivel e token

        Raises:
            ValidationError: usuário ou senha ausentes
            InvalidCredentials: nenhuma credencial corresponde
        """
        if not username or not password:
            raise ValidationError("Usuário e senha são obrigatórios")

        usuario = username.strip().upper()
        repo = UsuariosRepository(self.db)
        row = repo.find_by_credentials(usuario, hash_password(usuario, password), self.settings.login_level_codes)
        if not row:
            logger.warning(f"Falha na autenticação para {usuario}")
            raise InvalidCredentials()

        identity = Identity(usuario=row.usuario, codusuario=row.codusuario, nivel=row.nivel)
        logger.info(f"Usuário autenticado: {identity.usuario} (nível {identity.nivel})")
        return {
            "usuario": identity.usuario,
            "codusuario": identity.codusuario,
            "nivel": identity.nivel,
            "token": create_token(identity, settings=self.settings),
        }
