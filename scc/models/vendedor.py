"""SQLAlchemy models for sellers, seller commissions and seller goals."""

from sqlalchemy import Boolean, Column, Date, DateTime, Integer, Numeric, String, Text, UniqueConstraint, func

from scc.db import Base


class Vendedor(Base):
    """Cadastro de vendedores do ERP (view somente leitura 'vs_pwb_dvendedores')."""
    __tablename__ = "vs_pwb_dvendedores"
    __table_args__ = {"info": {"external": True}}

    codvendedor = Column(String(5), primary_key=True)
    vendedor = Column(String(50), nullable=False)
    nome_completo = Column(String(150), nullable=True)
    codloja = Column(String(2), nullable=True)

    def __repr__(self):
        return f"<Vendedor(codvendedor='{self.codvendedor}', vendedor='{self.vendedor}')>"


class ComissaoVendedor(Base):
    """Percentuais de comissão e meta mensal configurados para um vendedor."""
    __tablename__ = "pwb_comissoes_vendedores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codvendedor = Column(String(5), nullable=False, index=True)
    codloja = Column(String(2), nullable=False)
    percentual_base = Column(Numeric(6, 2), nullable=False, default=0)
    percentual_extra = Column(Numeric(6, 2), nullable=False, default=0)
    meta_mensal = Column(Numeric(12, 2), nullable=False, default=0)
    ativo = Column(Boolean, nullable=False, default=True)
    data_inicio = Column(Date, nullable=True)
    data_fim = Column(Date, nullable=True)
    observacoes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<ComissaoVendedor(id={self.id}, codvendedor='{self.codvendedor}')>"


class VendedorMeta(Base):
    """
    Metas de um vendedor em uma competência.

    'competencia' guarda sempre o primeiro dia do mês; há no máximo uma meta
    por vendedor e competência.
    """
    __tablename__ = "pwb_vendedor_metas"
    __table_args__ = (
        UniqueConstraint("codvendedor", "competencia", name="uq_vendedor_meta_competencia"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    codvendedor = Column(String(5), nullable=False)
    competencia = Column(Date, nullable=False)
    ferias = Column(Boolean, nullable=False, default=False)
    base_salarial = Column(Numeric(12, 2), nullable=True)
    meta_faturamento = Column(Numeric(12, 2), nullable=True)
    meta_lucra = Column(Numeric(12, 2), nullable=True)
    faturamento_minimo = Column(Numeric(12, 2), nullable=True)
    incfat90 = Column(Numeric(12, 2), nullable=True)
    incfat100 = Column(Numeric(12, 2), nullable=True)
    incluc90 = Column(Numeric(12, 2), nullable=True)
    incluc100 = Column(Numeric(12, 2), nullable=True)

    def __repr__(self):
        return f"<VendedorMeta(codvendedor='{self.codvendedor}', competencia={self.competencia})>"
