from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.schemas.comissao import ComissaoRangeCreate, ComissaoRangeSchema, ComissaoRangeUpdate
from scc.services import Acao, ComissaoService, Identity
from scc.services.comissao_service import range_to_dict

MODULO = "comissoes"

router = APIRouter(
    prefix="/api/comissoes",
    tags=["comissoes"],
)


@router.get("/", response_model=List[ComissaoRangeSchema])
async def listar_faixas(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [range_to_dict(f) for f in ComissaoService(db).list()]


@router.get("/{id}", response_model=ComissaoRangeSchema)
async def obter_faixa(
    id: int,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return range_to_dict(ComissaoService(db).get(id))


@router.post("/", response_model=ComissaoRangeSchema, status_code=201)
async def criar_faixa(
    payload: ComissaoRangeCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return range_to_dict(ComissaoService(db).create(payload))


@router.put("/{id}", response_model=ComissaoRangeSchema)
async def atualizar_faixa(
    id: int,
    payload: ComissaoRangeUpdate,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return range_to_dict(ComissaoService(db).update(id, payload))


@router.delete("/percentual/{id}")
async def excluir_percentual(
    id: int,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ComissaoService(db).delete_percentual(id)
    return {"message": "Percentual excluído com sucesso"}


@router.delete("/{id}")
async def excluir_faixa(
    id: int,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ComissaoService(db).delete(id)
    return {"message": "Faixa de comissão excluída com sucesso"}
