"""
Configuracion central del job de sincronizacion.
Gestiona variables de entorno (o .env) para la API del marketplace,
la base de datos PostgreSQL y el logging.
"""
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion del job.
    Lee variables de entorno y proporciona valores por defecto.

    - MARKETPLACE_API_*: origen de datos (URL base, key, tamaño de pagina)
    - DATABASE_URL se puede especificar completa o por componentes
    """

    APP_NAME: str = Field(default="Marketplace Sync")
    APP_VERSION: str = Field(default="1.0.0")

    # API del marketplace
    MARKETPLACE_API_BASE_URL: str = Field(default="")
    MARKETPLACE_API_KEY: str = Field(default="")
    MARKETPLACE_API_LIMIT: int = Field(default=500, gt=0)
    # Timeout por request HTTP (lo aplica requests, no el pipeline)
    MARKETPLACE_API_TIMEOUT_S: float = Field(default=60.0, gt=0)

    # Base de datos - Componentes separados
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="marketplace")
    DATABASE_PASSWORD: str = Field(default="marketplace")
    DATABASE_NAME: str = Field(default="marketplace")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/sync.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


# Instancia global de configuracion
settings = Settings()
