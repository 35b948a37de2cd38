"""SQLAlchemy models for the legacy ERP tables 'a_promoc' and 'a_filial'."""

from sqlalchemy import Column, Date, Numeric, String

from scc.db import Base


class Promocao(Base):
    """
    Preço promocional de um produto por loja e tabela de preço.

    Tabela legada do ERP; os nomes de coluna seguem o padrão 'c_*' original.
    """
    __tablename__ = "a_promoc"
    __table_args__ = {"info": {"external": True}}

    c_codprod = Column(String(5), primary_key=True)
    c_fil = Column(String(2), primary_key=True)
    c_tab = Column(String(2), primary_key=True)
    c_promocao = Column(Numeric(12, 2), nullable=False)
    c_validade = Column(Date, nullable=False)
    c_data = Column(Date, nullable=False)
    c_hora = Column(String(5), nullable=False)
    c_user = Column(String(5), nullable=False)

    @property
    def chave(self) -> str:
        return f"{self.c_codprod}-{self.c_fil}-{self.c_tab}"

    def __repr__(self):
        return f"<Promocao(chave='{self.chave}', c_promocao={self.c_promocao})>"


class Filial(Base):
    """Lojas cadastradas no ERP."""
    __tablename__ = "a_filial"
    __table_args__ = {"info": {"external": True}}

    c_codigo = Column(String(2), primary_key=True)
    c_filial = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Filial(c_codigo='{self.c_codigo}', c_filial='{self.c_filial}')>"
