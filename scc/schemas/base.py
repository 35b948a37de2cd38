from pydantic import BaseModel, ConfigDict
from typing import List, Any

class BaseSchema(BaseModel):
    """Esquema base para todos os modelos Pydantic."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class ImportErrorItem(BaseSchema):
    """Falha de um item em uma importação em lote."""
    codigo: str
    motivo: str


class ImportResult(BaseSchema):
    """Resultado de importação: itens aceitos e falhas por item."""
    success: List[Any] = []
    errors: List[ImportErrorItem] = []
