import pytest
from fastapi.testclient import TestClient

from scc.errors import NotFoundError, ValidationError
from scc.main import app
from scc.models import ComissaoPercentual
from scc.schemas.comissao import ComissaoRangeCreate, ComissaoRangeUpdate, PercentualIn
from scc.services import ComissaoService
from scc.services.comissao_service import range_to_dict

client = TestClient(app)

BASE = "/api/comissoes"
FAIXA = {
    "faixa_min": 0,
    "faixa_max": 10000,
    "loja": "01",
    "percentuais": [{"etiqueta": "verde", "percentual": 1.5}, {"etiqueta": "vermelha", "percentual": 0.5}],
}


def _criar(db, **overrides):
    return ComissaoService(db).create(ComissaoRangeCreate(**dict(FAIXA, **overrides)))


def test_create_range_with_percentuais(db):
    faixa = range_to_dict(_criar(db))

    assert faixa["loja"] == "01"
    assert faixa["faixa_max"] == 10000.0
    assert [(p["etiqueta"], p["percentual"]) for p in faixa["percentuais"]] == [("verde", 1.5), ("vermelha", 0.5)]


def test_create_range_validation(db):
    service = ComissaoService(db)

    with pytest.raises(ValidationError):
        service.create(ComissaoRangeCreate(**dict(FAIXA, faixa_min=500, faixa_max=100)))
    with pytest.raises(ValidationError):
        service.create(ComissaoRangeCreate(**dict(FAIXA, percentuais=[])))
    with pytest.raises(ValidationError):
        service.create(ComissaoRangeCreate(**dict(FAIXA, percentuais=[{"etiqueta": "verde"}])))


def test_update_changes_and_adds_percentuais(db):
    """Percentual com id é alterado; sem id é incluído."""
    faixa = _criar(db)
    verde = next(p for p in faixa.percentuais if p.etiqueta == "verde")

    atualizada = ComissaoService(db).update(
        faixa.id,
        ComissaoRangeUpdate(
            faixa_min=100,
            faixa_max=20000,
            loja="02",
            percentuais=[PercentualIn(id=verde.id, etiqueta="verde", percentual=2.0), PercentualIn(etiqueta="azul", percentual=3)],
        ),
    )

    dados = range_to_dict(atualizada)
    assert dados["loja"] == "02"
    assert {p["etiqueta"]: p["percentual"] for p in dados["percentuais"]} == {"azul": 3.0, "verde": 2.0, "vermelha": 0.5}


def test_update_with_foreign_percentual_rolls_back(db):
    service = ComissaoService(db)
    faixa = _criar(db)
    outra = _criar(db, loja="02")
    percentual_outra = outra.percentuais[0].id

    with pytest.raises(NotFoundError):
        service.update(
            faixa.id,
            ComissaoRangeUpdate(**dict(FAIXA, faixa_max=999, percentuais=[{"id": percentual_outra, "etiqueta": "x", "percentual": 1}])),
        )

    assert float(service.get(faixa.id).faixa_max) == 10000.0


def test_delete_range_removes_percentuais(db):
    service = ComissaoService(db)
    faixa = _criar(db)

    service.delete(faixa.id)

    assert db.query(ComissaoPercentual).count() == 0
    with pytest.raises(NotFoundError):
        service.get(faixa.id)


def test_delete_percentual(db):
    service = ComissaoService(db)
    faixa = _criar(db)
    id_percentual = faixa.percentuais[0].id

    service.delete_percentual(id_percentual)

    assert len(service.get(faixa.id).percentuais) == 1
    with pytest.raises(NotFoundError):
        service.delete_percentual(id_percentual)


# Testes da API
def test_api_crud(diretoria_headers):
    response = client.post(f"{BASE}/", json=FAIXA, headers=diretoria_headers)
    assert response.status_code == 201
    faixa = response.json()

    response = client.get(f"{BASE}/", headers=diretoria_headers)
    assert [f["id"] for f in response.json()] == [faixa["id"]]

    id_percentual = faixa["percentuais"][0]["id"]
    assert client.delete(f"{BASE}/percentual/{id_percentual}", headers=diretoria_headers).status_code == 200

    response = client.get(f"{BASE}/{faixa['id']}", headers=diretoria_headers)
    assert len(response.json()["percentuais"]) == 1

    assert client.delete(f"{BASE}/{faixa['id']}", headers=diretoria_headers).status_code == 200
    assert client.get(f"{BASE}/{faixa['id']}", headers=diretoria_headers).status_code == 404


def test_api_create_requires_permission(vendas_headers):
    response = client.post(f"{BASE}/", json=FAIXA, headers=vendas_headers)

    assert response.status_code == 403


def test_api_create_invalid_range(diretoria_headers):
    response = client.post(f"{BASE}/", json=dict(FAIXA, faixa_min=20000), headers=diretoria_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Faixa mínima deve ser menor que a faixa máxima"
