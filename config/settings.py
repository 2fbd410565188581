"""
Configurações globais do sistema usando Pydantic Settings.
Carrega variáveis de ambiente e define valores padrão.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configurações principais do sistema."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ambiente
    env: Literal["development", "production", "testing"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_path: Path = Field(default=Path("./logs"))

    # Navegação (ms)
    navigation_timeout: int = Field(default=30000, ge=1000, le=180000)
    navigation_fallback_timeout: int = Field(default=20000, ge=1000, le=180000)
    render_delay: int = Field(default=2000, ge=0, le=30000)
    container_timeout: int = Field(default=5000, ge=0, le=60000)

    # Localização de produtos (ms)
    primary_selector_timeout: int = Field(default=15000, ge=100, le=120000)
    fallback_selector_timeout: int = Field(default=5000, ge=100, le=120000)

    # Filtro de candidatos e matching
    max_candidates: int = Field(default=80, ge=1, le=1000)
    min_candidate_length: int = Field(default=3, ge=1, le=50)
    substring_min_length: int = Field(default=5, ge=1, le=50)
    heuristic_scan_enabled: bool = True

    # Se True, falha de navegação encerra a loja sem tentar localizar produtos
    abort_on_navigation_failure: bool = False

    # Paralelismo (None = todas as lojas ao mesmo tempo)
    max_concurrency: int | None = Field(default=None, ge=1, le=32)

    # Playwright
    headless: bool = True
    page_timeout: int = Field(default=30000, ge=1000, le=180000)
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
    )
    viewport_width: int = Field(default=1280, ge=320, le=3840)
    viewport_height: int = Field(default=800, ge=240, le=2160)
    locale: str = "en-SG"
    timezone_id: str = "Asia/Singapore"

    @field_validator("log_path", mode="after")
    @classmethod
    def ensure_path_exists(cls, v: Path) -> Path:
        """Garante que o diretório de logs exista."""
        v.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def is_production(self) -> bool:
        """Indica se está rodando em produção."""
        return self.env == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Retorna instância singleton das configurações.
    Usa cache para evitar recarregar .env múltiplas vezes.
    """
    return Settings()
