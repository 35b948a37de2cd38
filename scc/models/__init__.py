"""SQLAlchemy models for the application."""

from scc.db import Base

# Import all models here to ensure they are registered with SQLAlchemy
from .usuario import UsuarioCredencial
from .controle_acesso import Modulo, NivelAcesso, PermissaoNivel
from .autorizacao_compra import AutorizacaoCompra
from .produto import ProdutoCadastro, ProdutoFora, ProdutoEtiqueta
from .promocao import Promocao, Filial
from .comissao import ComissaoRange, ComissaoPercentual
from .vendedor import Vendedor, ComissaoVendedor, VendedorMeta

__all__ = [
    "Base",
    "UsuarioCredencial",
    "Modulo",
    "NivelAcesso",
    "PermissaoNivel",
    "AutorizacaoCompra",
    "ProdutoCadastro",
    "ProdutoFora",
    "ProdutoEtiqueta",
    "Promocao",
    "Filial",
    "ComissaoRange",
    "ComissaoPercentual",
    "Vendedor",
    "ComissaoVendedor",
    "VendedorMeta",
]
