from typing import Optional, List
from pydantic import Field

from scc.schemas.base import BaseSchema


class PercentualIn(BaseSchema):
    """Percentual de uma faixa; com 'id' atualiza, sem 'id' inclui."""
    id: Optional[int] = None
    etiqueta: Optional[str] = None
    percentual: Optional[float] = None


class PercentualSchema(BaseSchema):
    id: int
    id_range: int
    etiqueta: str
    percentual: float


class ComissaoRangeCreate(BaseSchema):
    faixa_min: float
    faixa_max: float
    loja: str = Field(min_length=1, max_length=2)
    percentuais: List[PercentualIn] = []


class ComissaoRangeUpdate(ComissaoRangeCreate):
    pass


class ComissaoRangeSchema(BaseSchema):
    id: int
    faixa_min: float
    faixa_max: float
    loja: str
    percentuais: List[PercentualSchema] = []
