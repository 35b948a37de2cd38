"""SQLAlchemy models for access control: modules, access levels and permissions."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from scc.db import Base


class Modulo(Base):
    """
    Unidade de funcionalidade sujeita a permissão.

    A coluna 'rota' é a chave usada pelas verificações de permissão.
    """
    __tablename__ = "scc_modulos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(Text, nullable=False)
    rota = Column(Text, nullable=False, unique=True)
    icone = Column(Text, nullable=True)
    ordem = Column(Integer, nullable=False, default=0)
    ativo = Column(Boolean, nullable=False, default=True)

    permissoes = relationship("PermissaoNivel", back_populates="modulo", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Modulo(id={self.id}, rota='{self.rota}')>"


class NivelAcesso(Base):
    """Nível de acesso do usuário (ex.: '00' diretoria, '06' controladoria)."""
    __tablename__ = "scc_niveis_acesso"

    codigo = Column(String(2), primary_key=True)
    descricao = Column(Text, nullable=False)
    ativo = Column(Boolean, nullable=False, default=True)

    permissoes = relationship("PermissaoNivel", back_populates="nivel", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<NivelAcesso(codigo='{self.codigo}', descricao='{self.descricao}')>"


class PermissaoNivel(Base):
    """
    Permissões de um nível sobre um módulo.

    A chave primária composta garante no máximo uma linha por par
    (nível, módulo); gravações são feitas por upsert.
    """
    __tablename__ = "scc_permissoes_nivel"

    codigo_nivel = Column(String(2), ForeignKey("scc_niveis_acesso.codigo", ondelete="CASCADE"), primary_key=True)
    id_modulo = Column(Integer, ForeignKey("scc_modulos.id", ondelete="CASCADE"), primary_key=True)
    visualizar = Column(Boolean, nullable=False, default=False)
    incluir = Column(Boolean, nullable=False, default=False)
    editar = Column(Boolean, nullable=False, default=False)
    excluir = Column(Boolean, nullable=False, default=False)

    nivel = relationship("NivelAcesso", back_populates="permissoes")
    modulo = relationship("Modulo", back_populates="permissoes")

    def __repr__(self):
        return f"<PermissaoNivel(codigo_nivel='{self.codigo_nivel}', id_modulo={self.id_modulo})>"
