"""SQLAlchemy model for the credential view 'vs_pwb_usuarios'."""

from sqlalchemy import Column, String

from scc.db import Base


class UsuarioCredencial(Base):
    """
    Credenciais dos usuários mantidas pelo ERP.

    Mapeia uma view externa somente leitura; consultada apenas no login.
    """
    __tablename__ = "vs_pwb_usuarios"
    __table_args__ = {"info": {"external": True}}

    usuario = Column(String(30), primary_key=True)
    codusuario = Column(String(5), nullable=False)
    senha = Column(String(64), nullable=False)
    nivel = Column(String(2), nullable=False)

    def __repr__(self):
        return f"<UsuarioCredencial(usuario='{self.usuario}', nivel='{self.nivel}')>"
