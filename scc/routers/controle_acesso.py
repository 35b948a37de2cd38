from typing import Any, Dict, List
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from scc.db import get_db
from scc.dependencies import get_current_user, require_permission
from scc.errors import ValidationError
from scc.schemas.controle_acesso import (
    ModuloCreate,
    ModuloSchema,
    ModuloUpdate,
    NivelAcessoCreate,
    NivelAcessoSchema,
    NivelAcessoUpdate,
    PermissaoItem,
    PermissaoModuloResponse,
    PermissaoSchema,
)
from scc.services import Acao, ControleAcessoService, Identity

MODULO = "controle-acesso"
_permissoes_adapter = TypeAdapter(List[PermissaoItem])

router = APIRouter(
    prefix="/api/controle-acesso",
    tags=["controle-acesso"],
)


def _permissao_dict(p) -> Dict[str, Any]:
    return {
        "codigo_nivel": p.codigo_nivel,
        "id_modulo": p.id_modulo,
        "visualizar": p.visualizar,
        "incluir": p.incluir,
        "editar": p.editar,
        "excluir": p.excluir,
        "modulo_nome": p.modulo.nome if p.modulo else None,
        "modulo_rota": p.modulo.rota if p.modulo else None,
    }


# Módulos

@router.get("/modulos", response_model=List[ModuloSchema])
async def listar_modulos(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).list_modulos()


@router.post("/modulos", response_model=ModuloSchema, status_code=201)
async def criar_modulo(
    payload: ModuloCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).create_modulo(payload)


@router.put("/modulos/{id}", response_model=ModuloSchema)
async def atualizar_modulo(
    id: int,
    payload: ModuloUpdate,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).update_modulo(id, payload)


@router.delete("/modulos/{id}")
async def excluir_modulo(
    id: int,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ControleAcessoService(db).delete_modulo(id)
    return {"message": "Módulo excluído com sucesso"}


# Níveis de acesso

@router.get("/niveis", response_model=List[NivelAcessoSchema])
async def listar_niveis(
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).list_niveis()


@router.post("/niveis", response_model=NivelAcessoSchema, status_code=201)
async def criar_nivel(
    payload: NivelAcessoCreate,
    user: Identity = Depends(require_permission(MODULO, Acao.CREATE)),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).create_nivel(payload)


@router.put("/niveis/{codigo}", response_model=NivelAcessoSchema)
async def atualizar_nivel(
    codigo: str,
    payload: NivelAcessoUpdate,
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    return ControleAcessoService(db).update_nivel(codigo, payload)


@router.delete("/niveis/{codigo}")
async def excluir_nivel(
    codigo: str,
    user: Identity = Depends(require_permission(MODULO, Acao.DELETE)),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    ControleAcessoService(db).delete_nivel(codigo)
    return {"message": "Nível de acesso excluído com sucesso"}


# Permissões

@router.get("/permissoes/{codigo}", response_model=List[PermissaoSchema])
async def listar_permissoes(
    codigo: str,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return [_permissao_dict(p) for p in ControleAcessoService(db).list_permissoes(codigo)]


@router.put("/permissoes/{codigo}", response_model=List[PermissaoSchema])
async def salvar_permissoes(
    codigo: str,
    payload: Any = Body(...),
    user: Identity = Depends(require_permission(MODULO, Acao.EDIT)),
    db: Session = Depends(get_db),
):
    """Grava as permissões do nível; o corpo deve ser uma lista de permissões por módulo."""
    if not isinstance(payload, list):
        raise ValidationError("Formato de permissões inválido")
    try:
        itens = _permissoes_adapter.validate_python(payload)
    except PydanticValidationError as e:
        raise ValidationError("Formato de permissões inválido", details=str(e))
    return [_permissao_dict(p) for p in ControleAcessoService(db).save_permissoes(codigo, itens)]


@router.get("/verificar/{modulo}/{acao}", response_model=PermissaoModuloResponse)
async def verificar_permissao(
    modulo: str,
    acao: Acao,
    user: Identity = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Dict[str, Any]:
    """Informa se o nível do usuário atual pode executar a ação no módulo."""
    permitido = ControleAcessoService(db).get_module_permission(user.nivel, modulo, acao)
    return {"modulo": modulo, "acao": acao.value, "permitido": permitido}
