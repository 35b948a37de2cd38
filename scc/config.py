from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict
from pydantic import Field
from typing import List, FrozenSet


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in (value or "").split(",") if item.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables (.env)."""
    environment: str = Field(default="development", alias="ENVIRONMENT")
    database_url: str = Field(alias="DATABASE_URL")
    app_port: int = Field(default=8601, alias="APP_PORT")

    # Origens permitidas separadas por vírgula; vazio libera todas
    frontend_url: str = Field(default="", alias="FRONTEND_URL")

    # Configurações do token de sessão
    jwt_secret: str = Field(default="insecure_key_for_dev_only", alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    token_expire_hours: int = Field(default=8, alias="TOKEN_EXPIRE_HOURS")

    # Níveis de acesso
    login_levels: str = Field(default="00,06,15,80", alias="LOGIN_LEVELS")
    nivel_diretoria: str = Field(default="00", alias="NIVEL_DIRETORIA")
    nivel_controladoria: str = Field(default="06", alias="NIVEL_CONTROLADORIA")

    # pydantic-settings v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def allowed_origins(self) -> List[str]:
        return _split_csv(self.frontend_url) or ["*"]

    @property
    def login_level_codes(self) -> List[str]:
        return _split_csv(self.login_levels)

    @property
    def privileged_levels(self) -> FrozenSet[str]:
        """Níveis que enxergam todas as autorizações de compra."""
        return frozenset({self.nivel_diretoria, self.nivel_controladoria})


def get_settings() -> "Settings":
    return Settings()  # type: ignore[call-arg]
