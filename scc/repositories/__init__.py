from .base import BaseRepository
from .usuarios_repository import UsuariosRepository
from .controle_acesso_repository import ModulosRepository, NiveisRepository, PermissoesRepository
from .autorizacao_compra_repository import AutorizacaoCompraRepository
from .produtos_repository import ProdutosRepository, ProdutoForaRepository, ProdutoEtiquetaRepository
from .promocoes_repository import PromocoesRepository
from .comissoes_repository import ComissaoRangeRepository, ComissaoPercentualRepository
from .vendedores_repository import (
    VendedoresRepository,
    ComissaoVendedorRepository,
    VendedorMetaRepository,
)

__all__ = [
    "BaseRepository",
    "UsuariosRepository",
    "ModulosRepository",
    "NiveisRepository",
    "PermissoesRepository",
    "AutorizacaoCompraRepository",
    "ProdutosRepository",
    "ProdutoForaRepository",
    "ProdutoEtiquetaRepository",
    "PromocoesRepository",
    "ComissaoRangeRepository",
    "ComissaoPercentualRepository",
    "VendedoresRepository",
    "ComissaoVendedorRepository",
    "VendedorMetaRepository",
]
