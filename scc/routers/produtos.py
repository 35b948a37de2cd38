from typing import Any, Dict, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.schemas import ImportResult
from scc.schemas.produto import (
    EtiquetaCreate,
    ImportarEtiquetasRequest,
    ImportarForaRequest,
    ProdutoBusca,
    ProdutoCompetencia,
    ProdutoForaCreate,
)
from scc.services import Acao, Identity, ProdutoService
from scc.utils.competencia import format_competencia

MODULO = "produtos"

router = APIRouter(
    prefix="/api/produtos",
    tags=["produtos"],
)


@router.get("/fora", response_model=List[ProdutoCompetencia])
async def listar_produtos_fora(
    mes_ano: str = Query(..., alias="mesAno"),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).list_fora(mes_ano)


@router.get("/etiquetas", response_model=List[ProdutoCompetencia])
async def listar_produtos_etiquetas(
    mes_ano: str = Query(..., alias="mesAno"),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).list_etiquetas(mes_ano)


@router.get("/buscar", response_model=List[ProdutoBusca])
async def buscar_produtos(
    termo: str = Query(...),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).search(termo)


@router.post("/fora", status_code=201)
async def adicionar_produto_fora(
    payload: ProdutoForaCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    produto = ProdutoService(db).add_fora(payload.codproduto, payload.mes_ano)
    return {
        "message": "Produto adicionado com sucesso",
        "codproduto": produto.codproduto,
        "mes_ano": format_competencia(produto.mes_ano),
    }


@router.delete("/fora/{codproduto}/{mes_ano}")
async def remover_produto_fora(
    codproduto: str,
    mes_ano: str,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ProdutoService(db).remove_fora(codproduto, mes_ano)
    return {"message": "Produto removido com sucesso"}


@router.post("/etiqueta", status_code=201)
async def adicionar_etiqueta(
    payload: EtiquetaCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    etiqueta = ProdutoService(db).set_etiqueta(payload.codproduto, payload.mes_ano, payload.etiqueta)
    return {
        "message": "Etiqueta gravada com sucesso",
        "codproduto": etiqueta.codproduto,
        "mes_ano": format_competencia(etiqueta.mes_ano),
        "etiqueta": etiqueta.etiqueta,
    }


@router.delete("/etiqueta/{codproduto}/{mes_ano}")
async def remover_etiqueta(
    codproduto: str,
    mes_ano: str,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ProdutoService(db).remove_etiqueta(codproduto, mes_ano)
    return {"message": "Etiqueta removida com sucesso"}


@router.post("/fora/importar", response_model=ImportResult)
async def importar_produtos_fora(
    payload: ImportarForaRequest,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).import_fora(payload.codigos, payload.mes_ano)


@router.post("/etiqueta/importar", response_model=ImportResult)
async def importar_etiquetas(
    payload: ImportarEtiquetasRequest,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return ProdutoService(db).import_etiquetas(payload.produtos, payload.mes_ano)
