import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import AlreadyExists, NotFoundError, ValidationError
from scc.models import ProdutoCadastro, ProdutoEtiqueta, ProdutoFora
from scc.repositories import ProdutoEtiquetaRepository, ProdutoForaRepository, ProdutosRepository
from scc.schemas.produto import EtiquetaImportItem
from scc.utils.competencia import format_competencia, pad_codigo, parse_competencia

logger = logging.getLogger("uvicorn")

ETIQUETAS_VALIDAS = ("verde", "vermelha")
ETIQUETA_PADRAO = "verde"

MOTIVO_JA_EXISTE = "Produto já existe para esta competência"
MOTIVO_NAO_CADASTRADO = "Produto não encontrado no cadastro"
MOTIVO_ERRO_INTERNO = "Erro interno ao processar produto"


def _produto_dict(codproduto: str, mes_ano, cadastro: Optional[ProdutoCadastro], etiqueta: Optional[str] = None) -> Dict[str, Any]:
    """Linha de listagem com os dados do cadastro e valores padrão."""
    return {
        "codproduto": codproduto,
        "produto": (cadastro.produto if cadastro and cadastro.produto else f"Produto {codproduto}").upper(),
        "unidade": (cadastro.unidade if cadastro and cadastro.unidade else "UN"),
        "status": (cadastro.status if cadastro and cadastro.status else "ATIVO"),
        "fornecedor": cadastro.fornecedor if cadastro else None,
        "categoria": cadastro.categoria if cadastro else None,
        "subcategoria": cadastro.subcategoria if cadastro else None,
        "mes_ano": format_competencia(mes_ano),
        "etiqueta": etiqueta,
    }


class ProdutoService:
    """Produtos fora da campanha e etiquetas por competência."""

    def __init__(self, db: Session):
        self.db = db
        self.cadastro = ProdutosRepository(db)
        self.fora = ProdutoForaRepository(db)
        self.etiquetas = ProdutoEtiquetaRepository(db)

    def list_fora(self, mes_ano: str) -> List[Dict[str, Any]]:
        competencia = parse_competencia(mes_ano)
        return [_produto_dict(f.codproduto, f.mes_ano, cad) for f, cad in self.fora.list_competencia(competencia)]

    def list_etiquetas(self, mes_ano: str) -> List[Dict[str, Any]]:
        competencia = parse_competencia(mes_ano)
        return [
            _produto_dict(e.codproduto, e.mes_ano, cad, etiqueta=e.etiqueta)
            for e, cad in self.etiquetas.list_competencia(competencia)
        ]

    def search(self, termo: str) -> List[ProdutoCadastro]:
        if not termo or not termo.strip():
            raise ValidationError("Termo de busca é obrigatório")
        return self.cadastro.search(termo.strip(), limit=50)

    def add_fora(self, codproduto: str, mes_ano: str) -> ProdutoFora:
        """
        Marca o produto como fora da campanha na competência.

        Raises:
            AlreadyExists: produto já marcado na competência
            NotFoundError: produto inexistente no cadastro
        """
        codigo = pad_codigo(codproduto, 5)
        competencia = parse_competencia(mes_ano)
        with transaction(self.db):
            if self.fora.get((codigo, competencia)):
                raise AlreadyExists(f"Produto {codigo} já existe para esta competência")
            if not self.cadastro.exists(codigo):
                raise NotFoundError(f"Produto {codigo} não encontrado no cadastro")
            produto = self.fora.create({"codproduto": codigo, "mes_ano": competencia})
        logger.info(f"Produto {codigo} adicionado como fora em {format_competencia(competencia)}")
        return produto

    def remove_fora(self, codproduto: str, mes_ano: str) -> None:
        codigo = pad_codigo(codproduto, 5)
        competencia = parse_competencia(mes_ano)
        with transaction(self.db):
            if not self.fora.delete((codigo, competencia)):
                raise NotFoundError("Produto não encontrado para esta competência")

    def set_etiqueta(self, codproduto: str, mes_ano: str, etiqueta: str) -> ProdutoEtiqueta:
        """Inclui ou troca a etiqueta do produto na competência."""
        valor = (etiqueta or "").strip().lower()
        if valor not in ETIQUETAS_VALIDAS:
            raise ValidationError("Etiqueta deve ser 'verde' ou 'vermelha'")
        codigo = pad_codigo(codproduto, 5)
        competencia = parse_competencia(mes_ano)
        with transaction(self.db):
            self.etiquetas.upsert(
                {"codproduto": codigo, "mes_ano": competencia, "etiqueta": valor},
                index_elements=["codproduto", "mes_ano"],
            )
        return self.etiquetas.get((codigo, competencia))

    def remove_etiqueta(self, codproduto: str, mes_ano: str) -> None:
        codigo = pad_codigo(codproduto, 5)
        competencia = parse_competencia(mes_ano)
        with transaction(self.db):
            if not self.etiquetas.delete((codigo, competencia)):
                raise NotFoundError("Produto não encontrado para esta competência")

    def import_fora(self, codigos: List[str], mes_ano: str) -> Dict[str, Any]:
        """
        Importa uma lista de códigos como produtos fora da competência.

        Cada item roda em um savepoint próprio: falhas individuais entram em
        'errors' e não desfazem os demais itens.
        """
        competencia = parse_competencia(mes_ano)
        resultado: Dict[str, Any] = {"success": [], "errors": []}
        with transaction(self.db):
            for bruto in codigos:
                codigo = pad_codigo(bruto, 5)
                if self.fora.get((codigo, competencia)):
                    resultado["errors"].append({"codigo": codigo, "motivo": MOTIVO_JA_EXISTE})
                    continue
                if not self.cadastro.exists(codigo):
                    resultado["errors"].append({"codigo": codigo, "motivo": MOTIVO_NAO_CADASTRADO})
                    continue
                try:
                    with self.db.begin_nested():
                        self.db.add(ProdutoFora(codproduto=codigo, mes_ano=competencia))
                        self.db.flush()
                except SQLAlchemyError:
                    logger.exception(f"Erro ao importar produto {codigo}")
                    resultado["errors"].append({"codigo": codigo, "motivo": MOTIVO_ERRO_INTERNO})
                    continue
                resultado["success"].append(codigo)
        logger.info(
            f"Importação de produtos fora concluída: {len(resultado['success'])} importados, "
            f"{len(resultado['errors'])} erros"
        )
        return resultado

    def import_etiquetas(self, itens: List[EtiquetaImportItem], mes_ano: str) -> Dict[str, Any]:
        """
        Importa etiquetas em lote.

        Etiquetas inválidas assumem 'verde'; produtos já etiquetados na
        competência têm a etiqueta atualizada.
        """
        competencia = parse_competencia(mes_ano)
        resultado: Dict[str, Any] = {"success": [], "errors": []}
        with transaction(self.db):
            for item in itens:
                codigo = pad_codigo(item.codproduto, 5)
                etiqueta = (item.etiqueta or "").strip().lower()
                if etiqueta not in ETIQUETAS_VALIDAS:
                    etiqueta = ETIQUETA_PADRAO
                existente = self.etiquetas.get((codigo, competencia))
                if not existente and not self.cadastro.exists(codigo):
                    resultado["errors"].append({"codigo": codigo, "motivo": MOTIVO_NAO_CADASTRADO})
                    continue
                try:
                    with self.db.begin_nested():
                        if existente:
                            existente.etiqueta = etiqueta
                        else:
                            self.db.add(ProdutoEtiqueta(codproduto=codigo, mes_ano=competencia, etiqueta=etiqueta))
                        self.db.flush()
                except SQLAlchemyError:
                    logger.exception(f"Erro ao importar etiqueta do produto {codigo}")
                    resultado["errors"].append({"codigo": codigo, "motivo": MOTIVO_ERRO_INTERNO})
                    continue
                resultado["success"].append(codigo)
        logger.info(
            f"Importação de etiquetas concluída: {len(resultado['success'])} importadas, "
            f"{len(resultado['errors'])} erros"
        )
        return resultado
