import logging
from typing import Iterable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.errors import Forbidden, InternalError, MalformedToken, MissingToken
from scc.services import Acao, ControleAcessoService, Identity, verify_token

logger = logging.getLogger("uvicorn")

# Apenas documenta o esquema Bearer no OpenAPI; a extração é feita abaixo
bearer_scheme = HTTPBearer(auto_error=False)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Extrai o token do cabeçalho Authorization.

    Raises:
        MissingToken: cabeçalho ausente ou vazio
        MalformedToken: esquema diferente de 'Bearer' (sensível a maiúsculas) ou token vazio
    """
    if not authorization or not authorization.strip():
        raise MissingToken()
    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0] != "Bearer":
        raise MalformedToken()
    return parts[1]


def get_current_user(request: Request, _credentials=Depends(bearer_scheme)) -> Identity:
    """
    Obtém a identidade do usuário a partir do token Bearer.

    A identidade é devolvida como valor imutável e repassada explicitamente
    aos handlers; nada é gravado no objeto da requisição.

    Raises:
        MissingToken, MalformedToken, InvalidOrExpiredToken
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    return verify_token(token)


def require_levels(allowed_levels: Iterable[str]):
    """
    Dependência que exige um dos níveis de acesso informados.

    Args:
        allowed_levels: Códigos de nível aceitos

    Returns:
        Uma dependência que devolve a identidade autorizada
    """
    allowed = frozenset(allowed_levels)

    def level_checker(user: Identity = Depends(get_current_user)) -> Identity:
        if user.nivel not in allowed:
            logger.warning(f"Acesso negado a {user.usuario}: nível {user.nivel} fora de {sorted(allowed)}")
            raise Forbidden()
        return user

    return level_checker


def require_permission(module_key: str, acao: Acao):
    """
    Dependência que exige permissão do nível do usuário sobre um módulo.

    Args:
        module_key: Rota do módulo (ex.: 'autorizacao-compra')
        acao: Ação exigida

    Returns:
        Uma dependência que devolve a identidade autorizada
    """

    def permission_checker(
        user: Identity = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> Identity:
        try:
            allowed = ControleAcessoService(db).get_module_permission(user.nivel, module_key, acao)
        except SQLAlchemyError as e:
            logger.exception("Erro ao verificar permissão")
            raise InternalError("Erro ao verificar permissão") from e
        if not allowed:
            logger.warning(f"Permissão negada a {user.usuario}: {module_key}/{Acao(acao).value}")
            raise Forbidden()
        return user

    return permission_checker
