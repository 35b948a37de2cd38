from typing import Callable, List, Optional
import logging
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from scc.dependencies.auth import extract_bearer_token
from scc.errors import AuthenticationError
from scc.services.auth_service import verify_token

logger = logging.getLogger("uvicorn")


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware que bloqueia requisições sem token válido às rotas da API.

    Responde 401 em JSON antes do roteamento. A identidade não é anexada à
    requisição: os handlers a obtêm pela dependência get_current_user.
    """

    def __init__(
        self,
        app,
        protected_prefix: str = "/api/",
        exclude_paths: Optional[List[str]] = None,
    ):
        super().__init__(app)
        self.protected_prefix = protected_prefix
        self.exclude_paths = exclude_paths or ["/api/auth/login"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method.upper() == "OPTIONS" or self._should_skip_auth(request.url.path):
            return await call_next(request)

        try:
            verify_token(extract_bearer_token(request.headers.get("Authorization")))
        except AuthenticationError as e:
            logger.warning(f"Requisição não autenticada em {request.url.path}: {e.message}")
            return JSONResponse(status_code=e.status_code, content=e.to_dict())

        return await call_next(request)

    def _should_skip_auth(self, path: str) -> bool:
        """Verifica se o caminho deve ignorar a verificação de autenticação."""
        if not path.startswith(self.protected_prefix):
            return True
        return any(path.startswith(exclude) for exclude in self.exclude_paths)
