from datetime import datetime
from typing import Any, Dict
import logging

import anyio
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .db import check_database_connection, masked_database_url
from .errors import AppError
from .middleware import AuthMiddleware
from .routers import (
    auth_router,
    autorizacoes_compra_router,
    comissoes_router,
    comissoes_vendedores_router,
    controle_acesso_router,
    produtos_router,
    promocoes_router,
    vendedor_metas_router,
)
from .version import read_version

logger = logging.getLogger("uvicorn")

SETTINGS = get_settings()
APP_VERSION = read_version()

# Inicializar a aplicação FastAPI
app = FastAPI(
    title="SCC API",
    description="API do sistema de controle comercial",
    version=APP_VERSION
)

# Bloquear chamadas à API sem token antes do roteamento
app.add_middleware(
    AuthMiddleware,
    exclude_paths=["/api/auth/login"],
)

# Configurar CORS (adicionado por último para responder também aos 401 do AuthMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=SETTINGS.allowed_origins,
    allow_credentials=SETTINGS.allowed_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message} {exc.details or ''}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Dados inválidos", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Erro inesperado em {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Erro interno do servidor"})


# Incluir routers
app.include_router(auth_router)
app.include_router(autorizacoes_compra_router)
app.include_router(controle_acesso_router)
app.include_router(produtos_router)
app.include_router(promocoes_router)
app.include_router(comissoes_router)
app.include_router(comissoes_vendedores_router)
app.include_router(vendedor_metas_router)


@app.on_event("startup")
async def _log_version_on_startup() -> None:
    logger.info("🚀 SCC API starting - version=%s environment=%s", APP_VERSION, SETTINGS.environment)
    logger.info("📊 Database URL: %s", masked_database_url(SETTINGS.database_url))
    logger.info("🌐 Allowed origins: %s", ", ".join(SETTINGS.allowed_origins))


@app.get("/health")
async def health() -> Dict[str, Any]:
    """Basic health check endpoint with status summary."""
    db_ok = await anyio.to_thread.run_sync(check_database_connection)
    return {
        "status": "ok" if db_ok else "down",
        "version": APP_VERSION,
        "db_ok": db_ok,
        "time": datetime.now().isoformat(),
    }


def run() -> None:
    """Sobe o servidor uvicorn na porta configurada (APP_PORT)."""
    import uvicorn

    uvicorn.run("scc.main:app", host="0.0.0.0", port=SETTINGS.app_port)
