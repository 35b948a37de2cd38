"""SQLAlchemy model for the 'scc_autorizacao_compra' table."""

from sqlalchemy import Boolean, CheckConstraint, Column, Date, Integer, Numeric, String, Text, Time

from scc.db import Base


class AutorizacaoCompra(Base):
    """
    Pedido de autorização de compra com aprovação em duas etapas.

    Fluxo: criada -> autorizada pela controladoria -> autorizada pela
    diretoria (liberada). A autorização da controladoria pode ser revertida
    enquanto a diretoria não tiver aprovado.
    """
    __tablename__ = "scc_autorizacao_compra"
    __table_args__ = (
        CheckConstraint(
            "NOT autorizado_diretoria OR autorizado_controladoria",
            name="ck_autorizacao_compra_ordem_aprovacao",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    loja = Column(String(2), nullable=False)
    setor = Column(String(50), nullable=False)
    fornecedor = Column(String(100), nullable=False)
    valor = Column(Numeric(12, 2), nullable=False)
    observacao = Column(Text, nullable=True)
    usuario = Column(String(30), nullable=False, index=True)
    data_criacao = Column(Date, nullable=False)
    hora_criacao = Column(Time, nullable=False)

    autorizado_controladoria = Column(Boolean, nullable=False, default=False)
    data_autorizacao_controladoria = Column(Date, nullable=True)
    usuario_controladoria = Column(String(30), nullable=True)

    autorizado_diretoria = Column(Boolean, nullable=False, default=False)
    data_autorizacao_diretoria = Column(Date, nullable=True)
    usuario_diretoria = Column(String(30), nullable=True)

    @property
    def liberada(self) -> bool:
        return bool(self.autorizado_controladoria and self.autorizado_diretoria)

    @property
    def possui_aprovacao(self) -> bool:
        return bool(self.autorizado_controladoria or self.autorizado_diretoria)

    def __repr__(self):
        return f"<AutorizacaoCompra(id={self.id}, usuario='{self.usuario}', liberada={self.liberada})>"
