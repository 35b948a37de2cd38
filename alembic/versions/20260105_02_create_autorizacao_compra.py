"""create purchase authorization table

Revision ID: 20260105_02
Revises: 20260105_01
Create Date: 2026-01-05
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20260105_02'
down_revision = '20260105_01'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'scc_autorizacao_compra',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('loja', sa.String(2), nullable=False),
        sa.Column('setor', sa.String(50), nullable=False),
        sa.Column('fornecedor', sa.String(100), nullable=False),
        sa.Column('valor', sa.Numeric(12, 2), nullable=False),
        sa.Column('observacao', sa.Text(), nullable=True),
        sa.Column('usuario', sa.String(30), nullable=False),
        sa.Column('data_criacao', sa.Date(), nullable=False, server_default=sa.text('CURRENT_DATE')),
        sa.Column('hora_criacao', sa.Time(), nullable=False, server_default=sa.text('CURRENT_TIME')),
        sa.Column('autorizado_controladoria', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('data_autorizacao_controladoria', sa.Date(), nullable=True),
        sa.Column('usuario_controladoria', sa.String(30), nullable=True),
        sa.Column('autorizado_diretoria', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('data_autorizacao_diretoria', sa.Date(), nullable=True),
        sa.Column('usuario_diretoria', sa.String(30), nullable=True),
        # Diretoria só aprova o que a controladoria já aprovou
        sa.CheckConstraint(
            'NOT autorizado_diretoria OR autorizado_controladoria',
            name='ck_autorizacao_compra_ordem_aprovacao',
        ),
    )
    op.create_index('ix_scc_autorizacao_compra_usuario', 'scc_autorizacao_compra', ['usuario'])
    op.create_index(
        'ix_scc_autorizacao_compra_criacao',
        'scc_autorizacao_compra',
        [sa.text('data_criacao DESC'), sa.text('hora_criacao DESC')],
    )


def downgrade() -> None:
    op.drop_index('ix_scc_autorizacao_compra_criacao', table_name='scc_autorizacao_compra')
    op.drop_index('ix_scc_autorizacao_compra_usuario', table_name='scc_autorizacao_compra')
    op.drop_table('scc_autorizacao_compra')
