from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from decimal import Decimal
from pydantic import field_validator

class Settings(BaseSettings):
    # Database settings
    POSTGRES_USER: str = 'chantier_user'
    POSTGRES_PASSWORD: str = 'chantier_pass'
    POSTGRES_DB: str = 'chantier_db'
    POSTGRES_HOST: str = 'postgres'
    POSTGRES_PORT: int = 5432
    # Si se define, reemplaza la URL construida con POSTGRES_*
    DATABASE_URL: Optional[str] = None

    # Facturación
    TAX_RATE: Decimal = Decimal('0.19')
    CURRENCY: str = 'DZD'
    PRINT_DELAY_MS: int = 500

    # Identidad del emisor (cabecera del documento impreso)
    ISSUER_NAME: str = 'Entreprise de Construction El Binaa'
    ISSUER_ADDRESS: str = 'Zone industrielle, Lot 12, Sétif'
    ISSUER_PHONE: str = '+213 36 00 00 00'
    ISSUER_REGISTRATION_NUMBER: str = 'RC 19/00-0000000 B 21'

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True

    @property
    def async_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    model_config = SettingsConfigDict(
        extra="allow",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @field_validator("DEBUG", mode="before")
    @classmethod
    def parse_debug(cls, v):
        if isinstance(v, str):
            return v.lower().strip('"').strip("'") in ("true", "1", "yes", "on")
        return bool(v)

    @field_validator("TAX_RATE", mode="before")
    @classmethod
    def parse_tax_rate(cls, v):
        # Acepta "19%" además de "0.19"
        if isinstance(v, str) and v.strip().endswith("%"):
            return Decimal(v.strip().rstrip("%")) / Decimal(100)
        return v

    @field_validator("TAX_RATE")
    @classmethod
    def validate_tax_rate(cls, v):
        if v < 0 or v >= 1:
            raise ValueError("TAX_RATE debe estar entre 0 y 1")
        if v.normalize().as_tuple().exponent < -4:
            raise ValueError("TAX_RATE admite como máximo 4 decimales")
        return v

settings = Settings()
