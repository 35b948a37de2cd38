from datetime import date
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from scc.config import get_settings
from scc.db import get_db
from scc.dependencies import get_current_user, require_levels, require_permission
from scc.errors import AlreadyApproved, Forbidden
from scc.schemas.autorizacao_compra import (
    AutorizacaoCompraCreate,
    AutorizacaoCompraFiltros,
    AutorizacaoCompraLista,
    AutorizacaoCompraSchema,
    AutorizacaoCompraUpdate,
)
from scc.services import Acao, AutorizacaoCompraService, Identity

MODULO = "autorizacao-compra"
SETTINGS = get_settings()

router = APIRouter(
    prefix="/api/autorizacoes-compra",
    tags=["autorizacoes-compra"],
)


@router.post("/", response_model=AutorizacaoCompraSchema, status_code=201)
async def criar_autorizacao(
    payload: AutorizacaoCompraCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return AutorizacaoCompraService(db).create(payload, requester=user.usuario)


@router.get("/", response_model=AutorizacaoCompraLista)
async def listar_autorizacoes(
    loja: Optional[str] = None,
    setor: Optional[str] = None,
    busca: Optional[str] = None,
    data_inicio: Optional[date] = Query(None, alias="dataInicio"),
    data_fim: Optional[date] = Query(None, alias="dataFim"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """
    Lista autorizações de compra.

    Controladoria e diretoria veem todas e podem filtrar; os demais níveis
    veem apenas os próprios pedidos.
    """
    filtros = AutorizacaoCompraFiltros(
        loja=loja, setor=setor, busca=busca, data_inicio=data_inicio, data_fim=data_fim, page=page, limit=limit
    )
    dados, total = AutorizacaoCompraService(db).list_for(user.usuario, user.nivel, filtros)
    return {"dados": dados, "total": total}


@router.get("/{id}", response_model=AutorizacaoCompraSchema)
async def obter_autorizacao(
    id: int,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = AutorizacaoCompraService(db)
    autorizacao = service.get(id)
    if not service.is_privileged(user.nivel) and autorizacao.usuario != user.usuario:
        raise Forbidden("Acesso negado à autorização de outro usuário")
    return autorizacao


@router.put("/{id}", response_model=AutorizacaoCompraSchema)
@router.patch("/{id}", response_model=AutorizacaoCompraSchema)
async def atualizar_autorizacao(
    id: int,
    payload: AutorizacaoCompraUpdate,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    """Edita o pedido; apenas o solicitante e antes da aprovação da controladoria."""
    service = AutorizacaoCompraService(db)
    autorizacao = service.get(id)
    if autorizacao.usuario != user.usuario:
        raise Forbidden("Apenas o solicitante pode alterar a autorização")
    if autorizacao.autorizado_controladoria:
        raise AlreadyApproved()
    return service.update(id, payload)


@router.delete("/{id}")
async def excluir_autorizacao(
    id: int,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    AutorizacaoCompraService(db).delete(id, requester=user.usuario)
    return {"message": "Autorização excluída com sucesso"}


@router.put("/{id}/autorizar-controladoria", response_model=AutorizacaoCompraSchema)
async def autorizar_controladoria(
    id: int,
    user: Identity = Depends(require_levels([SETTINGS.nivel_controladoria])),
    _perm: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return AutorizacaoCompraService(db).approve_controladoria(id, approver=user.usuario)


@router.put("/{id}/reverter-controladoria", response_model=AutorizacaoCompraSchema)
async def reverter_controladoria(
    id: int,
    user: Identity = Depends(require_levels([SETTINGS.nivel_controladoria])),
    _perm: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return AutorizacaoCompraService(db).revert_controladoria(id)


@router.put("/{id}/autorizar-diretoria", response_model=AutorizacaoCompraSchema)
async def autorizar_diretoria(
    id: int,
    user: Identity = Depends(require_levels([SETTINGS.nivel_diretoria])),
    _perm: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return AutorizacaoCompraService(db).approve_diretoria(id, approver=user.usuario)
