"""SQLAlchemy models for commission ranges and their per-label percentages."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from scc.db import Base


class ComissaoRange(Base):
    """Faixa de comissão (valor mínimo e máximo) de uma loja."""
    __tablename__ = "pwb_comissao_range"

    id = Column(Integer, primary_key=True, autoincrement=True)
    faixa_min = Column(Numeric(12, 2), nullable=False)
    faixa_max = Column(Numeric(12, 2), nullable=False)
    codloja = Column(String(2), nullable=False)

    percentuais = relationship(
        "ComissaoPercentual",
        back_populates="range",
        cascade="all, delete-orphan",
        order_by="ComissaoPercentual.etiqueta",
    )

    def __repr__(self):
        return f"<ComissaoRange(id={self.id}, faixa_min={self.faixa_min}, faixa_max={self.faixa_max})>"


class ComissaoPercentual(Base):
    """Percentual de comissão de uma faixa para uma etiqueta."""
    __tablename__ = "pwb_comissao_percentual"

    id = Column(Integer, primary_key=True, autoincrement=True)
    id_range = Column(Integer, ForeignKey("pwb_comissao_range.id", ondelete="CASCADE"), nullable=False)
    etiqueta = Column(String(20), nullable=False)
    percentual = Column(Numeric(6, 2), nullable=False)

    range = relationship("ComissaoRange", back_populates="percentuais")

    def __repr__(self):
        return f"<ComissaoPercentual(id={self.id}, etiqueta='{self.etiqueta}', percentual={self.percentual})>"
