import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import AppError, ValidationError
from scc.models import ProdutoCadastro, Promocao
from scc.repositories import ProdutosRepository, PromocoesRepository
from scc.schemas.promocao import PromocaoImportItem
from scc.utils.competencia import pad_codigo

logger = logging.getLogger("uvicorn")


def _promocao_dict(promocao: Promocao, cadastro: Optional[ProdutoCadastro]) -> Dict[str, Any]:
    return {
        "codproduto": promocao.c_codprod,
        "codloja": promocao.c_fil,
        "tabela": promocao.c_tab,
        "valor_promocao": float(promocao.c_promocao),
        "data_validade": promocao.c_validade,
        "data_inclusao": promocao.c_data,
        "hora_inclusao": promocao.c_hora,
        "codusuario": promocao.c_user,
        "produto": (cadastro.produto or "").upper() if cadastro else "",
        "unidade": cadastro.unidade if cadastro else None,
        "status": cadastro.status if cadastro else None,
        "fornecedor": (cadastro.fornecedor or "") if cadastro else "",
        "categoria": (cadastro.categoria or "") if cadastro else "",
        "subcategoria": (cadastro.subcategoria or "") if cadastro else "",
    }


class PromocaoService:
    """Consulta e importação de preços promocionais (tabela a_promoc do ERP)."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = PromocoesRepository(db)
        self.cadastro = ProdutosRepository(db)

    def list_active(self, hoje: Optional[date] = None) -> List[Dict[str, Any]]:
        hoje = hoje or date.today()
        return [_promocao_dict(p, cad) for p, cad in self.repo.list_vigentes(hoje)]

    def search(self, termo: str, hoje: Optional[date] = None) -> List[Dict[str, Any]]:
        if not termo or not termo.strip():
            raise ValidationError("Termo de busca é obrigatório")
        hoje = hoje or date.today()
        return [_promocao_dict(p, cad) for p, cad in self.repo.list_vigentes(hoje, termo=termo.strip(), limit=50)]

    def import_promocoes(self, itens: List[PromocaoImportItem], codusuario: str) -> Dict[str, Any]:
        """
        Importa promoções item a item, cada um na sua própria transação.

        Códigos são completados com zeros e cortados no tamanho das colunas
        (produto 5, loja 2, tabela 2, usuário 5). Promoções existentes para
        o mesmo produto, loja e tabela são atualizadas.

        Returns:
            {"success": ["produto-loja-tabela", ...], "errors": [{codigo, motivo}]}
        """
        agora = datetime.now()
        usuario = (codusuario or "")[:5]
        resultado: Dict[str, Any] = {"success": [], "errors": []}

        for item in itens:
            codproduto = pad_codigo(item.codproduto, 5)
            codloja = pad_codigo(item.codloja, 2)
            tabela = pad_codigo(item.tabela, 2)
            chave = f"{codproduto}-{codloja}-{tabela}"

            if not self.cadastro.exists(codproduto):
                resultado["errors"].append({"codigo": codproduto, "motivo": "Produto não encontrado no cadastro"})
                continue

            try:
                with transaction(self.db):
                    self.repo.upsert(
                        {
                            "c_codprod": codproduto,
                            "c_fil": codloja,
                            "c_tab": tabela,
                            "c_promocao": item.valor_promocao,
                            "c_validade": item.data_validade,
                            "c_data": agora.date(),
                            "c_hora": agora.strftime("%H:%M"),
                            "c_user": usuario,
                        },
                        index_elements=["c_codprod", "c_fil", "c_tab"],
                    )
            except AppError as e:
                logger.error(f"Erro ao processar promoção {chave}: {e.message}")
                resultado["errors"].append({"codigo": chave, "motivo": f"Erro ao processar: {e.message}"})
                continue
            resultado["success"].append(chave)

        logger.info(
            f"Importação de promoções concluída: {len(resultado['success'])} produtos importados, "
            f"{len(resultado['errors'])} erros"
        )
        return resultado
