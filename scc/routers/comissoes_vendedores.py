from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.schemas.vendedor import ComissaoVendedorIn, ComissaoVendedorSchema, LojaSchema, VendedorSchema
from scc.services import Acao, ComissaoVendedorService, Identity

MODULO = "comissoes-vendedores"

router = APIRouter(
    prefix="/api/comissoes-vendedores",
    tags=["comissoes-vendedores"],
)


@router.get("/vendedores", response_model=List[VendedorSchema])
async def listar_vendedores(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).list_vendedores()


@router.get("/lojas", response_model=List[LojaSchema])
async def listar_lojas(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).list_lojas()


@router.get("/", response_model=List[ComissaoVendedorSchema])
async def listar_comissoes(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).list()


@router.get("/{id}", response_model=ComissaoVendedorSchema)
async def obter_comissao(
    id: int,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).get(id)


@router.post("/", response_model=ComissaoVendedorSchema, status_code=201)
async def criar_comissao(
    payload: ComissaoVendedorIn,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).create(payload)


@router.put("/{id}", response_model=ComissaoVendedorSchema)
@router.patch("/{id}", response_model=ComissaoVendedorSchema)
async def atualizar_comissao(
    id: int,
    payload: ComissaoVendedorIn,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return ComissaoVendedorService(db).update(id, payload)


@router.delete("/{id}")
async def excluir_comissao(
    id: int,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ComissaoVendedorService(db).delete(id)
    return {"message": "Comissão excluída com sucesso"}
