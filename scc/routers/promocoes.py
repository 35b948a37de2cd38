from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.schemas import ImportResult
from scc.schemas.promocao import ImportarPromocoesRequest, PromocaoSchema
from scc.services import Acao, Identity, PromocaoService

MODULO = "promocoes"

router = APIRouter(
    prefix="/api/promocoes",
    tags=["promocoes"],
)


@router.get("/", response_model=List[PromocaoSchema])
async def listar_promocoes(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Promoções vigentes (validade a partir de hoje)."""
    return PromocaoService(db).list_active()


@router.get("/buscar", response_model=List[PromocaoSchema])
async def buscar_promocoes(
    termo: str = Query(...),
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return PromocaoService(db).search(termo)


@router.post("/importar", response_model=ImportResult)
async def importar_promocoes(
    payload: ImportarPromocoesRequest,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return PromocaoService(db).import_promocoes(payload.produtos, codusuario=user.codusuario)
