from typing import Optional, List
from pydantic import Field

from scc.schemas.base import BaseSchema


class ProdutoBusca(BaseSchema):
    codproduto: str
    produto: str
    unidade: Optional[str] = None
    status: Optional[str] = None
    fornecedor: Optional[str] = None
    categoria: Optional[str] = None
    subcategoria: Optional[str] = None


class ProdutoCompetencia(ProdutoBusca):
    """Produto listado em uma competência (fora da campanha ou etiquetado)."""
    mes_ano: str
    etiqueta: Optional[str] = None


class ProdutoForaCreate(BaseSchema):
    codproduto: str = Field(min_length=1)
    mes_ano: str = Field(alias="mesAno")


class EtiquetaCreate(BaseSchema):
    codproduto: str = Field(min_length=1)
    mes_ano: str = Field(alias="mesAno")
    etiqueta: str


class ImportarForaRequest(BaseSchema):
    codigos: List[str]
    mes_ano: str = Field(alias="mesAno")


class EtiquetaImportItem(BaseSchema):
    codproduto: str
    etiqueta: Optional[str] = None


class ImportarEtiquetasRequest(BaseSchema):
    produtos: List[EtiquetaImportItem]
    mes_ano: str = Field(alias="mesAno")
