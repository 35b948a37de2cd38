"""Database connection and session management for SQLAlchemy."""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from .config import get_settings
from .errors import AlreadyExists, AppError, InternalError

logger = logging.getLogger("uvicorn")
settings = get_settings()


def masked_database_url(url: str) -> str:
    """Retorna a URL do banco com a senha mascarada, para logs."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except Exception:
        return "(URL format not recognized)"


def _create_engine(url: str) -> Engine:
    """
    Cria o engine conforme o dialeto da URL.

    PostgreSQL usa pool de conexões com verificação prévia; SQLite (usado nos
    testes) compartilha uma única conexão em memória entre as sessões.
    """
    echo = settings.environment == "development"
    if url.startswith("sqlite"):
        return create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_pre_ping=True,  # Check connection validity before using
        poolclass=QueuePool,
        echo=echo,
        connect_args={"options": "-c search_path=public"},
    )


logger.info("Connecting to database: %s", masked_database_url(settings.database_url))
engine = _create_engine(settings.database_url)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all models
Base = declarative_base()


def check_database_connection() -> bool:
    """Executa uma consulta simples para verificar se o banco responde."""
    try:
        with engine.connect() as conn:
            row = conn.execute(text("SELECT 1")).fetchone()
            return row is not None and row[0] == 1
    except SQLAlchemyError as e:
        logger.error(f"Database connection error: {str(e)}")
        return False


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Unidade de trabalho tudo-ou-nada.

    Confirma ao final do bloco; em qualquer erro desfaz as escritas pendentes
    e propaga. Violações de integridade viram AlreadyExists e os demais erros
    de banco viram InternalError.

    Usage:
        with transaction(db):
            db.add(obj)
    """
    try:
        yield db
        db.commit()
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Violação de integridade: {e.orig}")
        raise AlreadyExists("Violação de integridade") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Erro de banco de dados; transação desfeita")
        raise InternalError("Erro interno do servidor") from e
    except Exception:
        db.rollback()
        raise


def get_db():
    """
    Dependency for FastAPI routes that need database access.

    Usage:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            return db.query(models.Item).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
