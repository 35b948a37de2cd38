from datetime import date
from typing import Optional, List

from scc.schemas.base import BaseSchema


class PromocaoSchema(BaseSchema):
    codproduto: str
    codloja: str
    tabela: str
    valor_promocao: float
    data_validade: date
    data_inclusao: date
    hora_inclusao: str
    codusuario: str
    produto: str = ""
    unidade: Optional[str] = None
    status: Optional[str] = None
    fornecedor: str = ""
    categoria: str = ""
    subcategoria: str = ""


class PromocaoImportItem(BaseSchema):
    codproduto: str
    codloja: str
    tabela: str
    valor_promocao: float
    data_validade: date


class ImportarPromocoesRequest(BaseSchema):
    produtos: List[PromocaoImportItem]
