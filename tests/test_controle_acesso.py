import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from conftest import auth_headers
from scc.errors import NotFoundError, ValidationError
from scc.main import app
from scc.models import Modulo, PermissaoNivel
from scc.schemas.controle_acesso import ModuloUpdate, PermissaoItem
from scc.services import Acao, ControleAcessoService, Found, NotConfigured

client = TestClient(app)

BASE = "/api/controle-acesso"


def _modulo_id(db, rota):
    return db.query(Modulo).filter(Modulo.rota == rota).one().id


# Avaliação de permissões
def test_lookup_distinguishes_missing_row_from_denied(db):
    """Sem linha de permissão o resultado é NotConfigured; com linha, Found."""
    service = ControleAcessoService(db)

    assert service.lookup_permission("80", "produtos", Acao.VIEW) == Found(True)
    assert service.lookup_permission("80", "produtos", Acao.DELETE) == Found(False)
    assert service.lookup_permission("06", "produtos", Acao.VIEW) == NotConfigured()
    assert service.lookup_permission("80", "modulo-inexistente", Acao.VIEW) == NotConfigured()


def test_missing_configuration_is_denied(db):
    service = ControleAcessoService(db)

    assert service.get_module_permission("06", "produtos", Acao.VIEW) is False
    assert service.get_module_permission("99", "autorizacao-compra", Acao.VIEW) is False
    assert service.get_module_permission("15", "produtos", Acao.EDIT) is True


def test_leading_slash_in_module_key_is_ignored(db):
    service = ControleAcessoService(db)

    assert service.get_module_permission("80", "/produtos", Acao.VIEW) is True


def test_inactive_module_denies_every_action(db):
    service = ControleAcessoService(db)
    service.update_modulo(_modulo_id(db, "produtos"), ModuloUpdate(ativo=False))

    assert service.lookup_permission("15", "produtos", Acao.VIEW) == Found(False)


def test_save_permissoes_keeps_one_row_per_module(db):
    """Gravar duas vezes o mesmo módulo substitui a linha existente."""
    service = ControleAcessoService(db)
    id_modulo = _modulo_id(db, "promocoes")

    service.save_permissoes("80", [PermissaoItem(id_modulo=id_modulo, visualizar=True)])
    service.save_permissoes("80", [PermissaoItem(id_modulo=id_modulo, visualizar=True, incluir=True)])

    linhas = db.query(PermissaoNivel).filter_by(codigo_nivel="80", id_modulo=id_modulo).all()
    assert len(linhas) == 1
    assert linhas[0].incluir is True
    assert service.get_module_permission("80", "promocoes", Acao.CREATE) is True


def test_save_permissoes_is_all_or_nothing(db):
    service = ControleAcessoService(db)
    id_modulo = _modulo_id(db, "comissoes")

    with pytest.raises(ValidationError):
        service.save_permissoes("80", [
            PermissaoItem(id_modulo=id_modulo, visualizar=True),
            PermissaoItem(id_modulo=9999, visualizar=True),
        ])

    assert service.lookup_permission("80", "comissoes", Acao.VIEW) == NotConfigured()


def test_save_permissoes_unknown_level(db):
    with pytest.raises(NotFoundError):
        ControleAcessoService(db).save_permissoes("77", [])


# Testes da API
def test_verificar_endpoint(vendas_headers):
    response = client.get(f"{BASE}/verificar/produtos/visualizar", headers=vendas_headers)
    assert response.status_code == 200
    assert response.json() == {"modulo": "produtos", "acao": "visualizar", "permitido": True}

    response = client.get(f"{BASE}/verificar/produtos/excluir", headers=vendas_headers)
    assert response.json()["permitido"] is False


def test_verificar_endpoint_rejects_unknown_action(vendas_headers):
    response = client.get(f"{BASE}/verificar/produtos/aprovar", headers=vendas_headers)

    assert response.status_code == 400


def test_list_modulos_ordered(vendas_headers):
    response = client.get(f"{BASE}/modulos", headers=vendas_headers)

    assert response.status_code == 200
    rotas = [m["rota"] for m in response.json()]
    assert rotas[0] == "autorizacao-compra"
    assert len(rotas) == 7


def test_create_modulo_requires_permission(vendas_headers, diretoria_headers):
    payload = {"nome": "Relatórios", "rota": "relatorios", "ordem": 8}

    assert client.post(f"{BASE}/modulos", json=payload, headers=vendas_headers).status_code == 403

    response = client.post(f"{BASE}/modulos", json=payload, headers=diretoria_headers)
    assert response.status_code == 201
    assert response.json()["rota"] == "relatorios"

    response = client.post(f"{BASE}/modulos", json=payload, headers=diretoria_headers)
    assert response.status_code == 409


def test_nivel_crud(diretoria_headers):
    response = client.post(f"{BASE}/niveis", json={"codigo": "20", "descricao": "Estoque"}, headers=diretoria_headers)
    assert response.status_code == 201

    response = client.put(f"{BASE}/niveis/20", json={"descricao": "Estoque Central"}, headers=diretoria_headers)
    assert response.status_code == 200
    assert response.json()["descricao"] == "Estoque Central"

    assert client.delete(f"{BASE}/niveis/20", headers=diretoria_headers).status_code == 200
    assert client.delete(f"{BASE}/niveis/20", headers=diretoria_headers).status_code == 404


def test_save_permissoes_endpoint(db, diretoria_headers):
    id_modulo = _modulo_id(db, "vendedor-metas")
    payload = [{"id_modulo": id_modulo, "visualizar": True, "incluir": False, "editar": False, "excluir": False}]

    response = client.put(f"{BASE}/permissoes/15", json=payload, headers=diretoria_headers)

    assert response.status_code == 200
    salvas = {p["modulo_rota"]: p for p in response.json()}
    assert salvas["vendedor-metas"]["visualizar"] is True
    assert "produtos" in salvas

    response = client.get(f"{BASE}/verificar/vendedor-metas/visualizar", headers=auth_headers("COMPRAS", "15"))
    assert response.json()["permitido"] is True


def test_save_permissoes_endpoint_requires_list(diretoria_headers):
    """Corpo que não é uma lista é rejeitado antes de qualquer gravação."""
    response = client.put(f"{BASE}/permissoes/15", json={"id_modulo": 1}, headers=diretoria_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Formato de permissões inválido"


def test_permission_check_database_failure_returns_500(monkeypatch, vendas_headers):
    """Falha de banco ao avaliar a permissão vira erro interno, sem detalhes do SQL."""

    def _falha(self, nivel, module_key, acao):
        raise OperationalError("select", {}, Exception("db down"))

    monkeypatch.setattr(ControleAcessoService, "get_module_permission", _falha)

    response = client.post("/api/autorizacoes-compra/", json={"loja": "01", "setor": "A", "fornecedor": "X", "valor": 100}, headers=vendas_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Erro ao verificar permissão"}
