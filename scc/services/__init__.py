from .auth_service import AuthService, Identity, create_token, verify_token, hash_password
from .controle_acesso_service import Acao, ControleAcessoService, Found, NotConfigured
from .autorizacao_compra_service import AutorizacaoCompraService
from .produto_service import ProdutoService
from .promocao_service import PromocaoService
from .comissao_service import ComissaoService
from .comissao_vendedor_service import ComissaoVendedorService
from .vendedor_meta_service import VendedorMetaService

__all__ = [
    "AuthService",
    "Identity",
    "create_token",
    "verify_token",
    "hash_password",
    "Acao",
    "ControleAcessoService",
    "Found",
    "NotConfigured",
    "AutorizacaoCompraService",
    "ProdutoService",
    "PromocaoService",
    "ComissaoService",
    "ComissaoVendedorService",
    "VendedorMetaService",
]
