from datetime import date

import pytest
from fastapi.testclient import TestClient

from scc.errors import AlreadyExists, NotFoundError, ValidationError
from scc.main import app
from scc.models import ProdutoEtiqueta, ProdutoFora
from scc.schemas.produto import EtiquetaImportItem
from scc.services import ProdutoService
from scc.services.produto_service import MOTIVO_JA_EXISTE, MOTIVO_NAO_CADASTRADO

client = TestClient(app)

BASE = "/api/produtos"


# Produtos fora da campanha
def test_add_fora_pads_code_and_normalizes_competencia(db):
    produto = ProdutoService(db).add_fora("1", "2024-05-17")

    assert produto.codproduto == "00001"
    assert produto.mes_ano == date(2024, 5, 1)


def test_add_fora_duplicate_and_unknown_product(db):
    service = ProdutoService(db)
    service.add_fora("00001", "2024-05")

    with pytest.raises(AlreadyExists):
        service.add_fora("00001", "2024-05")
    with pytest.raises(NotFoundError):
        service.add_fora("99999", "2024-05")


def test_list_fora_uses_catalog_defaults(db):
    service = ProdutoService(db)
    service.add_fora("00004", "2024-05")
    service.add_fora("00001", "2024-05")
    service.add_fora("00002", "2024-06")

    produtos = service.list_fora("2024-05")

    assert [p["codproduto"] for p in produtos] == ["00001", "00004"]
    assert produtos[0]["produto"] == "ARROZ TIPO 1"
    assert produtos[1]["unidade"] == "UN"
    assert produtos[1]["status"] == "ATIVO"
    assert produtos[0]["mes_ano"] == "2024-05"


def test_invalid_competencia_is_rejected(db):
    with pytest.raises(ValidationError):
        ProdutoService(db).list_fora("maio/2024")


def test_import_fora_reports_per_item_results(db):
    """Três códigos, um já existente: dois importados e um erro."""
    service = ProdutoService(db)
    service.add_fora("00001", "2024-05")

    resultado = service.import_fora(["00001", "2", "00003"], "2024-05")

    assert resultado["success"] == ["00002", "00003"]
    assert resultado["errors"] == [{"codigo": "00001", "motivo": MOTIVO_JA_EXISTE}]
    assert db.query(ProdutoFora).count() == 3


def test_import_fora_unknown_product(db):
    resultado = ProdutoService(db).import_fora(["00003", "55555"], "2024-05")

    assert resultado["success"] == ["00003"]
    assert resultado["errors"] == [{"codigo": "55555", "motivo": MOTIVO_NAO_CADASTRADO}]


def test_remove_fora(db):
    service = ProdutoService(db)
    service.add_fora("00001", "2024-05")

    service.remove_fora("1", "2024-05")

    with pytest.raises(NotFoundError):
        service.remove_fora("00001", "2024-05")


# Etiquetas
def test_set_etiqueta_validates_value(db):
    with pytest.raises(ValidationError) as exc:
        ProdutoService(db).set_etiqueta("00001", "2024-05", "azul")

    assert exc.value.message == "Etiqueta deve ser 'verde' ou 'vermelha'"


def test_set_etiqueta_replaces_existing(db):
    service = ProdutoService(db)
    service.set_etiqueta("00001", "2024-05", "verde")
    etiqueta = service.set_etiqueta("00001", "2024-05", "VERMELHA")

    assert etiqueta.etiqueta == "vermelha"
    assert db.query(ProdutoEtiqueta).count() == 1


def test_import_etiquetas_defaults_invalid_label(db):
    service = ProdutoService(db)
    service.set_etiqueta("00002", "2024-05", "verde")

    resultado = service.import_etiquetas(
        [
            EtiquetaImportItem(codproduto="1", etiqueta="amarela"),
            EtiquetaImportItem(codproduto="00002", etiqueta="vermelha"),
            EtiquetaImportItem(codproduto="77777", etiqueta="verde"),
        ],
        "2024-05",
    )

    assert resultado["success"] == ["00001", "00002"]
    assert resultado["errors"] == [{"codigo": "77777", "motivo": MOTIVO_NAO_CADASTRADO}]
    etiquetas = {e["codproduto"]: e["etiqueta"] for e in service.list_etiquetas("2024-05")}
    assert etiquetas == {"00001": "verde", "00002": "vermelha"}


# Testes da API
def test_api_add_and_list_fora(comercial_headers):
    response = client.post(f"{BASE}/fora", json={"codproduto": "3", "mesAno": "2024-05"}, headers=comercial_headers)
    assert response.status_code == 201
    assert response.json()["codproduto"] == "00003"

    response = client.get(f"{BASE}/fora", params={"mesAno": "2024-05"}, headers=comercial_headers)
    assert response.status_code == 200
    assert [p["codproduto"] for p in response.json()] == ["00003"]

    response = client.post(f"{BASE}/fora", json={"codproduto": "3", "mesAno": "2024-05"}, headers=comercial_headers)
    assert response.status_code == 409


def test_api_view_only_level_cannot_add(vendas_headers):
    response = client.post(f"{BASE}/fora", json={"codproduto": "1", "mesAno": "2024-05"}, headers=vendas_headers)

    assert response.status_code == 403


def test_api_import_fora(comercial_headers):
    client.post(f"{BASE}/fora", json={"codproduto": "1", "mesAno": "2024-05"}, headers=comercial_headers)

    response = client.post(
        f"{BASE}/fora/importar",
        json={"codigos": ["1", "2", "3"], "mesAno": "2024-05"},
        headers=comercial_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] == ["00002", "00003"]
    assert data["errors"] == [{"codigo": "00001", "motivo": MOTIVO_JA_EXISTE}]


def test_api_invalid_etiqueta(comercial_headers):
    response = client.post(
        f"{BASE}/etiqueta",
        json={"codproduto": "1", "mesAno": "2024-05", "etiqueta": "amarela"},
        headers=comercial_headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Etiqueta deve ser 'verde' ou 'vermelha'"


def test_api_search(vendas_headers):
    response = client.get(f"{BASE}/buscar", params={"termo": "arroz"}, headers=vendas_headers)

    assert response.status_code == 200
    assert [p["codproduto"] for p in response.json()] == ["00001"]
