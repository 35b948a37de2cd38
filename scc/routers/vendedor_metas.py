from typing import Any, Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.schemas import ImportResult
from scc.schemas.vendedor import (
    CopiarMetasRequest,
    ImportarMetasRequest,
    VendedorMetaIn,
    VendedorMetaSchema,
    VendedorSchema,
)
from scc.services import Acao, Identity, VendedorMetaService

MODULO = "vendedor-metas"

router = APIRouter(
    prefix="/api/vendedor-metas",
    tags=["vendedor-metas"],
)


@router.get("/vendedores", response_model=List[VendedorSchema])
async def listar_vendedores(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return VendedorMetaService(db).list_vendedores()


@router.get("/competencia/{competencia}", response_model=List[VendedorMetaSchema])
async def listar_metas_competencia(
    competencia: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return VendedorMetaService(db).list_competencia(competencia)


@router.post("/copiar")
async def copiar_metas(
    payload: CopiarMetasRequest,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    return VendedorMetaService(db).copy(payload.competencia_origem, payload.competencia_destino)


@router.post("/importar", response_model=ImportResult)
async def importar_metas(
    payload: ImportarMetasRequest,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return VendedorMetaService(db).import_metas(payload.metas)


@router.post("/", response_model=VendedorMetaSchema)
async def salvar_meta(
    payload: VendedorMetaIn,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return VendedorMetaService(db).save(payload)


@router.get("/{codvendedor}/{competencia}", response_model=VendedorMetaSchema)
async def obter_meta(
    codvendedor: str,
    competencia: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return VendedorMetaService(db).get(codvendedor, competencia)


@router.delete("/{codvendedor}/{competencia}")
async def excluir_meta(
    codvendedor: str,
    competencia: str,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    VendedorMetaService(db).delete(codvendedor, competencia)
    return {"message": "Meta excluída com sucesso"}
