from datetime import date

import pytest
from fastapi.testclient import TestClient

from scc.errors import NotFoundError, ValidationError
from scc.main import app
from scc.models import VendedorMeta
from scc.schemas.vendedor import VendedorMetaIn
from scc.services import VendedorMetaService

client = TestClient(app)

BASE = "/api/vendedor-metas"


def _meta(codvendedor="00010", competencia="2024-05", **valores):
    dados = {"meta_faturamento": 100000, "base_salarial": 2500}
    dados.update(valores)
    return VendedorMetaIn(codvendedor=codvendedor, competencia=competencia, **dados)


def test_save_creates_then_updates(db):
    """Há no máximo uma meta por vendedor e competência."""
    service = VendedorMetaService(db)
    service.save(_meta())
    meta = service.save(_meta(competencia="2024-05-20", meta_faturamento=120000))

    assert meta["meta_faturamento"] == 120000.0
    assert meta["competencia"] == "2024-05"
    assert meta["vendedor"] == "CARLOS"
    assert db.query(VendedorMeta).count() == 1
    assert db.query(VendedorMeta).one().competencia == date(2024, 5, 1)


def test_list_competencia(db):
    service = VendedorMetaService(db)
    service.save(_meta("00010"))
    service.save(_meta("00020"))
    service.save(_meta("00010", "2024-06"))

    metas = service.list_competencia("2024-05")

    assert [m["vendedor"] for m in metas] == ["ANA", "CARLOS"]


def test_copy_replaces_destination(db):
    service = VendedorMetaService(db)
    service.save(_meta("00010", "2024-05"))
    service.save(_meta("00020", "2024-05"))
    service.save(_meta("00010", "2024-06", meta_faturamento=1))

    resultado = service.copy("2024-05", "2024-06")

    assert resultado["quantidade"] == 2
    assert service.get("00010", "2024-06")["meta_faturamento"] == 100000.0
    assert len(service.list_competencia("2024-06")) == 2


def test_copy_same_competencia_is_rejected(db):
    with pytest.raises(ValidationError):
        VendedorMetaService(db).copy("2024-05", "2024-05-10")


def test_import_metas_collects_item_errors(db):
    resultado = VendedorMetaService(db).import_metas([_meta("00010"), _meta("00020", "data-invalida")])

    assert resultado["success"] == ["00010"]
    assert [e["codigo"] for e in resultado["errors"]] == ["00020"]
    assert db.query(VendedorMeta).count() == 1


def test_import_without_metas(db):
    with pytest.raises(ValidationError) as exc:
        VendedorMetaService(db).import_metas([])

    assert exc.value.message == "Nenhuma meta para importar"


def test_delete_meta(db):
    service = VendedorMetaService(db)
    service.save(_meta())

    service.delete("00010", "2024-05")

    with pytest.raises(NotFoundError):
        service.get("00010", "2024-05")


# Testes da API
def test_api_save_and_copy(diretoria_headers):
    response = client.post(f"{BASE}/", json={"codvendedor": "00010", "competencia": "2024-05", "ferias": True}, headers=diretoria_headers)
    assert response.status_code == 200
    assert response.json()["ferias"] is True

    response = client.post(
        f"{BASE}/copiar",
        json={"competenciaOrigem": "2024-05", "competenciaDestino": "2024-07"},
        headers=diretoria_headers,
    )
    assert response.status_code == 200
    assert response.json()["quantidade"] == 1

    response = client.get(f"{BASE}/00010/2024-07", headers=diretoria_headers)
    assert response.status_code == 200
    assert response.json()["ferias"] is True


def test_api_import_empty_list(diretoria_headers):
    response = client.post(f"{BASE}/importar", json={"metas": []}, headers=diretoria_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Nenhuma meta para importar"


def test_api_save_requires_permission(vendas_headers):
    response = client.post(f"{BASE}/", json={"codvendedor": "00010", "competencia": "2024-05"}, headers=vendas_headers)

    assert response.status_code == 403
