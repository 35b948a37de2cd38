from datetime import date, datetime
from typing import Optional, List
from pydantic import Field

from scc.schemas.base import BaseSchema


class VendedorSchema(BaseSchema):
    codvendedor: str
    vendedor: str
    nome_completo: Optional[str] = None
    codloja: Optional[str] = None


class LojaSchema(BaseSchema):
    codloja: str
    loja: str


class ComissaoVendedorIn(BaseSchema):
    """Campos editáveis da comissão de um vendedor."""
    codvendedor: str = Field(min_length=1)
    codloja: str = Field(min_length=1, max_length=2)
    percentual_base: float = 0
    percentual_extra: float = 0
    meta_mensal: float = 0
    ativo: bool = True
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    observacoes: Optional[str] = None


class ComissaoVendedorSchema(ComissaoVendedorIn):
    id: int
    vendedor: Optional[str] = None
    nome_completo: Optional[str] = None
    loja: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VendedorMetaIn(BaseSchema):
    """Meta de um vendedor em uma competência ('AAAA-MM')."""
    codvendedor: str = Field(min_length=1)
    competencia: str
    ferias: bool = False
    base_salarial: Optional[float] = None
    meta_faturamento: Optional[float] = None
    meta_lucra: Optional[float] = None
    faturamento_minimo: Optional[float] = None
    incfat90: Optional[float] = None
    incfat100: Optional[float] = None
    incluc90: Optional[float] = None
    incluc100: Optional[float] = None


class VendedorMetaSchema(VendedorMetaIn):
    vendedor: Optional[str] = None
    nome_completo: Optional[str] = None
    codloja: Optional[str] = None


class CopiarMetasRequest(BaseSchema):
    competencia_origem: str = Field(alias="competenciaOrigem")
    competencia_destino: str = Field(alias="competenciaDestino")


class ImportarMetasRequest(BaseSchema):
    metas: List[VendedorMetaIn] = []
