import os

# Banco em memória para os testes; precisa estar definido antes de importar scc
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "segredo-de-teste"
os.environ["ENVIRONMENT"] = "test"

from typing import Dict

import pytest

from scc.db import Base, SessionLocal, engine
from scc.models import (
    Filial,
    Modulo,
    NivelAcesso,
    PermissaoNivel,
    ProdutoCadastro,
    UsuarioCredencial,
    Vendedor,
)
from scc.services import Identity, create_token, hash_password

NIVEIS = [("00", "Diretoria"), ("06", "Controladoria"), ("15", "Comercial"), ("80", "Vendas")]

MODULOS = [
    "autorizacao-compra",
    "produtos",
    "promocoes",
    "comissoes",
    "comissoes-vendedores",
    "vendedor-metas",
    "controle-acesso",
]

TOTAL = (True, True, True, True)
PERMISSOES = {
    "00": {rota: TOTAL for rota in MODULOS},
    "06": {"autorizacao-compra": TOTAL},
    "15": {"autorizacao-compra": TOTAL, "produtos": TOTAL},
    "80": {"autorizacao-compra": TOTAL, "produtos": (True, False, False, False)},
}

USUARIOS = [
    ("DIRETOR", "00001", "senha00", "00"),
    ("CONTROLLER", "00002", "senha06", "06"),
    ("JOAO", "00003", "senha80", "80"),
    ("MARIA", "00004", "senha80", "80"),
    ("COMPRAS", "00005", "senha15", "15"),
    ("ESTOQUE", "00006", "senha99", "99"),
]

PRODUTOS = [
    ("00001", "arroz tipo 1", "KG"),
    ("00002", "feijão carioca", "KG"),
    ("00003", "óleo de soja", "UN"),
    ("00004", "açúcar cristal", None),
]


@pytest.fixture(autouse=True)
def db():
    """Recria o schema e carrega níveis, módulos, permissões e cadastros do ERP."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        for codigo, descricao in NIVEIS:
            session.add(NivelAcesso(codigo=codigo, descricao=descricao, ativo=True))
        modulos = {}
        for ordem, rota in enumerate(MODULOS, start=1):
            modulos[rota] = Modulo(nome=rota.replace("-", " ").title(), rota=rota, ordem=ordem, ativo=True)
            session.add(modulos[rota])
        session.flush()
        for nivel, regras in PERMISSOES.items():
            for rota, (visualizar, incluir, editar, excluir) in regras.items():
                session.add(PermissaoNivel(
                    codigo_nivel=nivel,
                    id_modulo=modulos[rota].id,
                    visualizar=visualizar,
                    incluir=incluir,
                    editar=editar,
                    excluir=excluir,
                ))
        for usuario, codusuario, senha, nivel in USUARIOS:
            session.add(UsuarioCredencial(
                usuario=usuario, codusuario=codusuario, senha=hash_password(usuario, senha), nivel=nivel
            ))
        for codproduto, produto, unidade in PRODUTOS:
            session.add(ProdutoCadastro(codproduto=codproduto, produto=produto, unidade=unidade, fornecedor="ACME"))
        session.add(Vendedor(codvendedor="00010", vendedor="CARLOS", nome_completo="Carlos Souza", codloja="01"))
        session.add(Vendedor(codvendedor="00020", vendedor="ANA", nome_completo="Ana Lima", codloja="02"))
        for codigo, nome in [("01", "Loja Centro"), ("02", "Loja Norte"), ("99", "Depósito")]:
            session.add(Filial(c_codigo=codigo, c_filial=nome))
        session.commit()
        yield session
    finally:
        session.rollback()
        session.close()


def auth_headers(usuario: str, nivel: str, codusuario: str = "00000") -> Dict[str, str]:
    token = create_token(Identity(usuario=usuario, codusuario=codusuario, nivel=nivel))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def diretoria_headers():
    return auth_headers("DIRETOR", "00", "00001")


@pytest.fixture
def controladoria_headers():
    return auth_headers("CONTROLLER", "06", "00002")


@pytest.fixture
def vendas_headers():
    return auth_headers("joao", "80", "00003")


@pytest.fixture
def comercial_headers():
    return auth_headers("COMPRAS", "15", "00005")
