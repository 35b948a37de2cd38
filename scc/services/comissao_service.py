import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import NotFoundError, ValidationError
from scc.models import ComissaoPercentual, ComissaoRange
from scc.repositories import ComissaoPercentualRepository, ComissaoRangeRepository
from scc.schemas.comissao import ComissaoRangeCreate, ComissaoRangeUpdate, PercentualIn

logger = logging.getLogger("uvicorn")


def range_to_dict(faixa: ComissaoRange) -> Dict[str, Any]:
    return {
        "id": faixa.id,
        "faixa_min": float(faixa.faixa_min),
        "faixa_max": float(faixa.faixa_max),
        "loja": faixa.codloja,
        "percentuais": [
            {"id": p.id, "id_range": p.id_range, "etiqueta": p.etiqueta, "percentual": float(p.percentual)}
            for p in faixa.percentuais
        ],
    }


def _validate(dados: ComissaoRangeCreate, exige_percentual: bool) -> None:
    if dados.faixa_min >= dados.faixa_max:
        raise ValidationError("Faixa mínima deve ser menor que a faixa máxima")
    if exige_percentual and not dados.percentuais:
        raise ValidationError("Informe ao menos um percentual")
    for percentual in dados.percentuais:
        if not percentual.etiqueta or percentual.percentual is None:
            raise ValidationError("Cada percentual deve ter etiqueta e valor")


class ComissaoService:
    """Faixas de comissão e seus percentuais por etiqueta."""

    def __init__(self, db: Session):
        self.db = db
        self.ranges = ComissaoRangeRepository(db)
        self.percentuais = ComissaoPercentualRepository(db)

    def _get_or_404(self, id: int) -> ComissaoRange:
        faixa = self.ranges.get(id)
        if not faixa:
            raise NotFoundError("Faixa de comissão não encontrada")
        return faixa

    def list(self) -> List[ComissaoRange]:
        return self.ranges.list()

    def get(self, id: int) -> ComissaoRange:
        return self._get_or_404(id)

    def create(self, dados: ComissaoRangeCreate) -> ComissaoRange:
        """Cria a faixa e os percentuais na mesma transação."""
        _validate(dados, exige_percentual=True)
        with transaction(self.db):
            faixa = ComissaoRange(faixa_min=dados.faixa_min, faixa_max=dados.faixa_max, codloja=dados.loja)
            faixa.percentuais = [
                ComissaoPercentual(etiqueta=p.etiqueta, percentual=p.percentual) for p in dados.percentuais
            ]
            self.db.add(faixa)
            self.db.flush()
            faixa_id = faixa.id
        logger.info(f"Faixa de comissão {faixa_id} criada")
        return self._get_or_404(faixa_id)

    def update(self, id: int, dados: ComissaoRangeUpdate) -> ComissaoRange:
        """
        Atualiza a faixa e grava os percentuais enviados.

        Percentuais com 'id' são atualizados; sem 'id' são incluídos. Qualquer
        falha desfaz a operação inteira.
        """
        _validate(dados, exige_percentual=False)
        with transaction(self.db):
            faixa = self._get_or_404(id)
            faixa.faixa_min = dados.faixa_min
            faixa.faixa_max = dados.faixa_max
            faixa.codloja = dados.loja
            for item in dados.percentuais:
                self._save_percentual(faixa, item)
            self.db.flush()
        return self._get_or_404(id)

    def _save_percentual(self, faixa: ComissaoRange, item: PercentualIn) -> None:
        if item.id is None:
            faixa.percentuais.append(ComissaoPercentual(etiqueta=item.etiqueta, percentual=item.percentual))
            return
        percentual = self.percentuais.get(item.id)
        if not percentual or percentual.id_range != faixa.id:
            raise NotFoundError(f"Percentual {item.id} não encontrado nesta faixa")
        percentual.etiqueta = item.etiqueta
        percentual.percentual = item.percentual

    def delete(self, id: int) -> None:
        with transaction(self.db):
            faixa = self._get_or_404(id)
            # percentuais saem junto pelo cascade da relação
            self.db.delete(faixa)
            self.db.flush()
        logger.info(f"Faixa de comissão {id} excluída")

    def delete_percentual(self, id: int) -> None:
        with transaction(self.db):
            if not self.percentuais.delete(id):
                raise NotFoundError("Percentual não encontrado")
