from logging.config import fileConfig
import os
import sys
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

# Adiciona o diretório raiz ao sys.path para importar os modelos
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from scc.config import get_settings
from scc.models import Base

config = context.config

# Configura o logging a partir do alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _resolve_url() -> str:
    """Resolve a URL do banco, preferindo as configurações da aplicação (que leem o .env)."""
    try:
        return get_settings().database_url
    except Exception:
        return os.environ.get("DATABASE_URL", config.get_main_option("sqlalchemy.url"))


def include_object(obj, name, type_, reflected, compare_to):
    """Ignora views e tabelas do ERP, que não são gerenciadas por este serviço."""
    if type_ == "table" and obj.info.get("external"):
        return False
    return True


def run_migrations_offline() -> None:
    """Gera o SQL das migrações sem conectar ao banco."""
    context.configure(
        url=_resolve_url(),
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Executa as migrações conectado ao banco."""
    url = _resolve_url()
    if url:
        # Mantém o driver psycopg3 indicado na URL
        connectable = create_engine(url, poolclass=pool.NullPool)
    else:
        connectable = engine_from_config(
            config.get_section(config.config_ini_section, {}),
            prefix="sqlalchemy.",
            poolclass=pool.NullPool,
        )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
