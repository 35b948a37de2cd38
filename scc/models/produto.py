"""SQLAlchemy models for the product catalog and per-competência product flags."""

from sqlalchemy import Column, Date, String

from scc.db import Base


class ProdutoCadastro(Base):
    """Cadastro de produtos do ERP (view somente leitura 'vs_pwb_dprodutos')."""
    __tablename__ = "vs_pwb_dprodutos"
    __table_args__ = {"info": {"external": True}}

    codproduto = Column(String(5), primary_key=True)
    produto = Column(String(200), nullable=False)
    unidade = Column(String(10), nullable=True)
    status = Column(String(20), nullable=True)
    fornecedor = Column(String(100), nullable=True)
    categoria = Column(String(100), nullable=True)
    subcategoria = Column(String(100), nullable=True)
    codbarra = Column(String(20), nullable=True)
    referencia = Column(String(50), nullable=True)

    def __repr__(self):
        return f"<ProdutoCadastro(codproduto='{self.codproduto}', produto='{self.produto}')>"


class ProdutoFora(Base):
    """Produto retirado da campanha em uma competência (mes_ano = dia 1 do mês)."""
    __tablename__ = "pwb_produto_fora"

    codproduto = Column(String(5), primary_key=True)
    mes_ano = Column(Date, primary_key=True)

    def __repr__(self):
        return f"<ProdutoFora(codproduto='{self.codproduto}', mes_ano={self.mes_ano})>"


class ProdutoEtiqueta(Base):
    """Etiqueta (verde/vermelha) de um produto em uma competência."""
    __tablename__ = "pwb_produto_etiqueta"

    codproduto = Column(String(5), primary_key=True)
    mes_ano = Column(Date, primary_key=True)
    etiqueta = Column(String(10), nullable=False)

    def __repr__(self):
        return f"<ProdutoEtiqueta(codproduto='{self.codproduto}', etiqueta='{self.etiqueta}')>"
