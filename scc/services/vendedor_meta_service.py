import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import AppError, NotFoundError, ValidationError
from scc.models import Vendedor, VendedorMeta
from scc.repositories import VendedoresRepository, VendedorMetaRepository
from scc.schemas.vendedor import VendedorMetaIn
from scc.utils.competencia import format_competencia, parse_competencia

logger = logging.getLogger("uvicorn")

CAMPOS_META = (
    "ferias",
    "base_salarial",
    "meta_faturamento",
    "meta_lucra",
    "faturamento_minimo",
    "incfat90",
    "incfat100",
    "incluc90",
    "incluc100",
)


def _num(value) -> Optional[float]:
    return float(value) if value is not None else None


def meta_to_dict(meta: VendedorMeta, vendedor: Optional[Vendedor]) -> Dict[str, Any]:
    data = {campo: _num(getattr(meta, campo)) for campo in CAMPOS_META if campo != "ferias"}
    data.update(
        codvendedor=meta.codvendedor,
        competencia=format_competencia(meta.competencia),
        ferias=bool(meta.ferias),
        vendedor=vendedor.vendedor if vendedor else None,
        nome_completo=vendedor.nome_completo if vendedor else None,
        codloja=vendedor.codloja if vendedor else None,
    )
    return data


class VendedorMetaService:
    """Metas mensais de vendedores."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = VendedorMetaRepository(db)
        self.vendedores = VendedoresRepository(db)

    def list_vendedores(self) -> List[Vendedor]:
        return self.vendedores.list()

    def list_competencia(self, competencia: str) -> List[Dict[str, Any]]:
        inicio = parse_competencia(competencia)
        return [meta_to_dict(m, v) for m, v in self.repo.list_competencia(inicio)]

    def get(self, codvendedor: str, competencia: str) -> Dict[str, Any]:
        meta = self.repo.find(codvendedor, parse_competencia(competencia))
        if not meta:
            raise NotFoundError("Meta não encontrada")
        return meta_to_dict(meta, self.vendedores.get(codvendedor))

    def _save(self, dados: VendedorMetaIn) -> VendedorMeta:
        competencia = parse_competencia(dados.competencia)
        values = dados.model_dump(include=set(CAMPOS_META))
        meta = self.repo.find(dados.codvendedor, competencia)
        if meta:
            return self.repo.update(meta, values)
        return self.repo.create(dict(values, codvendedor=dados.codvendedor, competencia=competencia))

    def save(self, dados: VendedorMetaIn) -> Dict[str, Any]:
        """Cria ou atualiza a meta do vendedor na competência."""
        with transaction(self.db):
            meta = self._save(dados)
        logger.info(f"Meta salva para o vendedor {dados.codvendedor} em {format_competencia(meta.competencia)}")
        return self.get(dados.codvendedor, dados.competencia)

    def delete(self, codvendedor: str, competencia: str) -> None:
        with transaction(self.db):
            meta = self.repo.find(codvendedor, parse_competencia(competencia))
            if not meta:
                raise NotFoundError("Meta não encontrada")
            self.db.delete(meta)
            self.db.flush()

    def copy(self, origem: str, destino: str) -> Dict[str, Any]:
        """
        Copia todas as metas de uma competência para outra.

        As metas já existentes no destino são substituídas.
        """
        inicio_origem = parse_competencia(origem)
        inicio_destino = parse_competencia(destino)
        if inicio_origem == inicio_destino:
            raise ValidationError("Competências de origem e destino devem ser diferentes")
        with transaction(self.db):
            self.repo.delete_competencia(inicio_destino)
            metas = self.repo.list_models(inicio_origem)
            for meta in metas:
                copia = {campo: getattr(meta, campo) for campo in CAMPOS_META}
                self.db.add(VendedorMeta(codvendedor=meta.codvendedor, competencia=inicio_destino, **copia))
            self.db.flush()
        quantidade = len(metas)
        logger.info(f"{quantidade} metas copiadas de {origem} para {destino}")
        return {"message": f"{quantidade} metas copiadas com sucesso", "quantidade": quantidade}

    def import_metas(self, metas: List[VendedorMetaIn]) -> Dict[str, Any]:
        """Importa metas em lote, com um savepoint por item."""
        if not metas:
            raise ValidationError("Nenhuma meta para importar")
        resultado: Dict[str, Any] = {"success": [], "errors": []}
        with transaction(self.db):
            for dados in metas:
                codigo = dados.codvendedor
                try:
                    with self.db.begin_nested():
                        self._save(dados)
                except AppError as e:
                    resultado["errors"].append({"codigo": codigo, "motivo": e.message})
                    continue
                except SQLAlchemyError:
                    logger.exception(f"Erro ao importar meta do vendedor {codigo}")
                    resultado["errors"].append({"codigo": codigo, "motivo": "Erro interno ao processar meta"})
                    continue
                resultado["success"].append(codigo)
        logger.info(
            f"Importação de metas concluída: {len(resultado['success'])} importadas, {len(resultado['errors'])} erros"
        )
        return resultado
