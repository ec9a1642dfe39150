from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    # Configurações básicas do projeto
    PROJECT_NAME: str = "Customer Registry"
    PROJECT_VERSION: str = "1.0.0"
    API_V1_STR: str = "/api"

    # Banco de dados
    DATABASE_URL: str = "sqlite:///./customer_registry.db"
    STORAGE_BACKEND: str = "database"  # "database" ou "memory"

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Google Sheets (Apps Script web app)
    GOOGLE_APPS_SCRIPT_URL: Optional[str] = None
    SHEETS_TIMEOUT_SECONDS: float = 30.0

    # Configurações de CORS
    BACKEND_CORS_ORIGINS: List[str] = []

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignora variáveis extras não declaradas


settings = Settings()
