from typing import Any, Dict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scc.db import get_db
from scc.dependencies import get_current_user
from scc.schemas.auth import LoginRequest, LoginResponse, VerificarResponse
from scc.services import AuthService, Identity

router = APIRouter(
    prefix="/api/auth",
    tags=["auth"],
)


@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Autentica o usuário e devolve o token de sessão (válido por 8 horas)."""
    return AuthService(db).authenticate(payload.usuario, payload.senha)


@router.get("/verificar", response_model=VerificarResponse)
async def verificar(user: Identity = Depends(get_current_user)) -> Dict[str, Any]:
    return {"autenticado": True, "usuario": user.usuario, "nivel": user.nivel}
