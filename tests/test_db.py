import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from scc.db import transaction
from scc.errors import AlreadyExists, InternalError
from scc.models import NivelAcesso


def test_transaction_database_error_hides_sql(db):
    """Erros de banco viram InternalError sem o texto do SQL no corpo da resposta."""
    with pytest.raises(InternalError) as exc:
        with transaction(db):
            raise OperationalError("SELECT * FROM scc_autorizacao_compra", {}, Exception("db down"))

    assert exc.value.details is None
    assert exc.value.to_dict() == {"error": "Erro interno do servidor"}


def test_transaction_integrity_error_is_conflict(db):
    with pytest.raises(AlreadyExists) as exc:
        with transaction(db):
            raise IntegrityError("INSERT INTO nivel_acesso", {}, Exception("duplicate key"))

    assert exc.value.status_code == 409
    assert exc.value.details is None


def test_transaction_rolls_back_on_error(db):
    with pytest.raises(InternalError):
        with transaction(db):
            db.add(NivelAcesso(codigo="50", descricao="Temporário", ativo=True))
            db.flush()
            raise OperationalError("UPDATE", {}, Exception("db down"))

    assert db.get(NivelAcesso, "50") is None
