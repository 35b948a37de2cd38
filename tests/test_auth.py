from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from conftest import auth_headers
from scc.config import get_settings
from scc.errors import InvalidOrExpiredToken, MalformedToken, MissingToken
from scc.main import app
from scc.dependencies import extract_bearer_token
from scc.services import Identity, create_token, hash_password, verify_token

client = TestClient(app)


# Testes para o hash de senha
def test_hash_password_uppercases_username():
    """O hash usa o usuário em maiúsculas concatenado à senha."""
    assert hash_password("joao", "abc") == hash_password("JOAO", "abc")
    assert hash_password("JOAO", "abc") != hash_password("JOAO", "abd")
    assert len(hash_password("JOAO", "abc")) == 32


# Testes para o login
def test_login_success():
    """Login com credenciais válidas devolve identidade e token."""
    response = client.post("/api/auth/login", json={"usuario": "joao", "senha": "senha80"})

    assert response.status_code == 200
    data = response.json()
    assert data["usuario"] == "JOAO"
    assert data["codusuario"] == "00003"
    assert data["nivel"] == "80"
    identity = verify_token(data["token"])
    assert identity == Identity(usuario="JOAO", codusuario="00003", nivel="80")


def test_login_invalid_password():
    response = client.post("/api/auth/login", json={"usuario": "joao", "senha": "errada"})

    assert response.status_code == 401
    assert response.json()["error"] == "Usuário ou senha inválidos"


def test_login_level_outside_allow_list():
    """Usuários com nível fora da lista permitida não conseguem entrar."""
    response = client.post("/api/auth/login", json={"usuario": "estoque", "senha": "senha99"})

    assert response.status_code == 401


def test_login_missing_fields():
    response = client.post("/api/auth/login", json={"usuario": "joao"})

    assert response.status_code == 400
    assert response.json()["error"] == "Usuário e senha são obrigatórios"


# Testes para verificação do token
def test_verificar_with_valid_token():
    response = client.get("/api/auth/verificar", headers=auth_headers("JOAO", "80"))

    assert response.status_code == 200
    assert response.json() == {"autenticado": True, "usuario": "JOAO", "nivel": "80"}


def test_verificar_without_token():
    response = client.get("/api/auth/verificar")

    assert response.status_code == 401
    assert response.json()["error"] == "Token não fornecido"


def test_verificar_with_malformed_header():
    response = client.get("/api/auth/verificar", headers={"Authorization": "Token abc"})

    assert response.status_code == 401
    assert response.json()["error"] == "Token mal formatado"


def test_verificar_with_tampered_token():
    token = create_token(Identity(usuario="JOAO", codusuario="00003", nivel="80"))
    response = client.get("/api/auth/verificar", headers={"Authorization": f"Bearer {token}x"})

    assert response.status_code == 401
    assert response.json()["error"] == "Token inválido ou expirado"


def test_token_expires_after_eight_hours():
    """Token emitido em T é rejeitado em T+8h+1s."""
    issued_at = datetime.now(timezone.utc) - timedelta(hours=8, seconds=1)
    token = create_token(Identity(usuario="JOAO", codusuario="00003", nivel="80"), issued_at=issued_at)

    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_token_still_valid_before_expiry():
    issued_at = datetime.now(timezone.utc) - timedelta(hours=7, minutes=59)
    token = create_token(Identity(usuario="JOAO", codusuario="00003", nivel="80"), issued_at=issued_at)

    assert verify_token(token).usuario == "JOAO"


def test_token_without_identity_claims_is_rejected():
    settings = get_settings()
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"usuario": "JOAO", "iat": int(now.timestamp()), "exp": int((now + timedelta(hours=1)).timestamp())},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(InvalidOrExpiredToken):
        verify_token(token)


def test_extract_bearer_token():
    assert extract_bearer_token("Bearer abc.def") == "abc.def"
    with pytest.raises(MissingToken):
        extract_bearer_token(None)
    with pytest.raises(MalformedToken):
        extract_bearer_token("Bearer")
    with pytest.raises(MalformedToken):
        extract_bearer_token("Basic abc")
    with pytest.raises(MalformedToken):
        extract_bearer_token("bearer abc.def")


# Testes para o middleware
def test_middleware_blocks_api_routes_without_token():
    """Rotas da API sem token recebem 401 antes do roteamento."""
    response = client.get("/api/produtos/fora?mesAno=2024-05")

    assert response.status_code == 401
    assert response.json()["error"] == "Token não fornecido"


def test_health_is_public():
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["db_ok"] is True
    assert data["status"] == "ok"
