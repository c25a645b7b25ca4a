"""
Configuração da aplicação / Application configuration.
Utiliza pydantic-settings para carregar do .env ou de variáveis de ambiente.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Agenda do Laboratório"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite por padrão em desenvolvimento
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./lab_scheduler.db"
    # Criar tabelas no startup (dev) / Create tables on startup (dev only)
    CREATE_TABLES_ON_STARTUP: bool = True

    # CORS - origens autorizadas / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # JWT Authentication
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30

    # Rate Limiting
    RATE_LIMIT_LOGIN: str = "5/minute"

    # Recorrência / Recurrence
    # 104 semanas = dois anos letivos / 104 weeks = two school years
    MAX_RECURRING_OCCURRENCES: int = 104
    UPCOMING_DEFAULT_LIMIT: int = 3

    # Web Push (VAPID)
    VAPID_PUBLIC_KEY: str | None = None
    VAPID_PRIVATE_KEY: str | None = None
    VAPID_CONTACT_EMAIL: str = "mailto:proati@example.com"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
