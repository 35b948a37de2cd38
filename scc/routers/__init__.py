from .auth import router as auth_router
from .autorizacoes_compra import router as autorizacoes_compra_router
from .controle_acesso import router as controle_acesso_router
from .produtos import router as produtos_router
from .promocoes import router as promocoes_router
from .comissoes import router as comissoes_router
from .comissoes_vendedores import router as comissoes_vendedores_router
from .vendedor_metas import router as vendedor_metas_router

__all__ = [
    "auth_router",
    "autorizacoes_compra_router",
    "controle_acesso_router",
    "produtos_router",
    "promocoes_router",
    "comissoes_router",
    "comissoes_vendedores_router",
    "vendedor_metas_router",
]
