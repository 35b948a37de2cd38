"""create product flag, commission and seller goal tables

Revision ID: 20260105_03
Revises: 20260105_02
Create Date: 2026-01-05
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20260105_03'
down_revision = '20260105_02'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'pwb_produto_fora',
        sa.Column('codproduto', sa.String(5), primary_key=True),
        sa.Column('mes_ano', sa.Date(), primary_key=True),
    )

    op.create_table(
        'pwb_produto_etiqueta',
        sa.Column('codproduto', sa.String(5), primary_key=True),
        sa.Column('mes_ano', sa.Date(), primary_key=True),
        sa.Column('etiqueta', sa.String(10), nullable=False),
        sa.CheckConstraint("etiqueta IN ('verde', 'vermelha')", name='ck_produto_etiqueta_valor'),
    )

    op.create_table(
        'pwb_comissao_range',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('faixa_min', sa.Numeric(12, 2), nullable=False),
        sa.Column('faixa_max', sa.Numeric(12, 2), nullable=False),
        sa.Column('codloja', sa.String(2), nullable=False),
    )

    op.create_table(
        'pwb_comissao_percentual',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id_range', sa.Integer(), sa.ForeignKey('pwb_comissao_range.id', ondelete='CASCADE'), nullable=False),
        sa.Column('etiqueta', sa.String(20), nullable=False),
        sa.Column('percentual', sa.Numeric(6, 2), nullable=False),
    )

    op.create_table(
        'pwb_comissoes_vendedores',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('codvendedor', sa.String(5), nullable=False, index=True),
        sa.Column('codloja', sa.String(2), nullable=False),
        sa.Column('percentual_base', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('percentual_extra', sa.Numeric(6, 2), nullable=False, server_default='0'),
        sa.Column('meta_mensal', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('ativo', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('data_inicio', sa.Date(), nullable=True),
        sa.Column('data_fim', sa.Date(), nullable=True),
        sa.Column('observacoes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'pwb_vendedor_metas',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('codvendedor', sa.String(5), nullable=False),
        sa.Column('competencia', sa.Date(), nullable=False),
        sa.Column('ferias', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('base_salarial', sa.Numeric(12, 2), nullable=True),
        sa.Column('meta_faturamento', sa.Numeric(12, 2), nullable=True),
        sa.Column('meta_lucra', sa.Numeric(12, 2), nullable=True),
        sa.Column('faturamento_minimo', sa.Numeric(12, 2), nullable=True),
        sa.Column('incfat90', sa.Numeric(12, 2), nullable=True),
        sa.Column('incfat100', sa.Numeric(12, 2), nullable=True),
        sa.Column('incluc90', sa.Numeric(12, 2), nullable=True),
        sa.Column('incluc100', sa.Numeric(12, 2), nullable=True),
        sa.UniqueConstraint('codvendedor', 'competencia', name='uq_vendedor_meta_competencia'),
    )


def downgrade() -> None:
    op.drop_table('pwb_vendedor_metas')
    op.drop_table('pwb_comissoes_vendedores')
    op.drop_table('pwb_comissao_percentual')
    op.drop_table('pwb_comissao_range')
    op.drop_table('pwb_produto_etiqueta')
    op.drop_table('pwb_produto_fora')
