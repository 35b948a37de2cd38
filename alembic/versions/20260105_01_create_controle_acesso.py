"""create access control tables and seed levels, modules and permissions

Revision ID: 20260105_01
Revises:
Create Date: 2026-01-05
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20260105_01'
down_revision = None
branch_labels = None
depends_on = None


NIVEIS = [
    ("00", "Diretoria"),
    ("06", "Controladoria"),
    ("15", "Comercial"),
    ("80", "Vendas"),
]

# (nome, rota, icone, ordem)
MODULOS = [
    ("Autorização de Compra", "autorizacao-compra", "shopping-cart", 1),
    ("Produtos", "produtos", "package", 2),
    ("Promoções", "promocoes", "tag", 3),
    ("Faixas de Comissão", "comissoes", "percent", 4),
    ("Comissões de Vendedores", "comissoes-vendedores", "users", 5),
    ("Metas de Vendedores", "vendedor-metas", "target", 6),
    ("Controle de Acesso", "controle-acesso", "shield", 7),
]

# nível -> {rota: (visualizar, incluir, editar, excluir)}
PERMISSOES = {
    "00": {rota: (True, True, True, True) for _, rota, _, _ in MODULOS},
    "06": {
        "autorizacao-compra": (True, True, True, True),
        "produtos": (True, False, False, False),
        "promocoes": (True, False, False, False),
    },
    "15": {
        "autorizacao-compra": (True, True, True, True),
        "produtos": (True, True, True, True),
        "promocoes": (True, True, False, False),
    },
    "80": {
        "autorizacao-compra": (True, True, True, True),
    },
}


def upgrade() -> None:
    op.create_table(
        'scc_niveis_acesso',
        sa.Column('codigo', sa.String(2), primary_key=True, nullable=False),
        sa.Column('descricao', sa.Text(), nullable=False),
        sa.Column('ativo', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'scc_modulos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('nome', sa.Text(), nullable=False),
        sa.Column('rota', sa.Text(), nullable=False, unique=True),
        sa.Column('icone', sa.Text(), nullable=True),
        sa.Column('ordem', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('ativo', sa.Boolean(), nullable=False, server_default=sa.true()),
    )

    op.create_table(
        'scc_permissoes_nivel',
        sa.Column('codigo_nivel', sa.String(2), sa.ForeignKey('scc_niveis_acesso.codigo', ondelete='CASCADE'), primary_key=True),
        sa.Column('id_modulo', sa.Integer(), sa.ForeignKey('scc_modulos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('visualizar', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('incluir', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('editar', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('excluir', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    # Seed dos níveis e módulos
    for codigo, descricao in NIVEIS:
        op.execute(
            f"INSERT INTO scc_niveis_acesso (codigo, descricao, ativo) "
            f"VALUES ('{codigo}', '{descricao}', TRUE) ON CONFLICT DO NOTHING;"
        )
    for nome, rota, icone, ordem in MODULOS:
        op.execute(
            f"INSERT INTO scc_modulos (nome, rota, icone, ordem, ativo) "
            f"VALUES ('{nome}', '{rota}', '{icone}', {ordem}, TRUE) ON CONFLICT DO NOTHING;"
        )

    # A diretoria recebe acesso total por permissão explícita, sem exceção no código
    for codigo, modulos in PERMISSOES.items():
        for rota, (visualizar, incluir, editar, excluir) in modulos.items():
            op.execute(
                "INSERT INTO scc_permissoes_nivel "
                "(codigo_nivel, id_modulo, visualizar, incluir, editar, excluir) "
                f"SELECT '{codigo}', id, {visualizar}, {incluir}, {editar}, {excluir} "
                f"FROM scc_modulos WHERE rota = '{rota}' "
                "ON CONFLICT (codigo_nivel, id_modulo) DO NOTHING;"
            )


def downgrade() -> None:
    op.drop_table('scc_permissoes_nivel')
    op.drop_table('scc_modulos')
    op.drop_table('scc_niveis_acesso')
