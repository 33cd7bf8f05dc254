"""Settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

FALLBACK_RSA_KEY_SIZE_DEFAULT = 2048
FALLBACK_HMAC_SECRET_SIZE_DEFAULT = 64
FALLBACK_AES_SECRET_SIZE_DEFAULT = 16
DB_POOL_SIZE_DEFAULT = 5
DB_MAX_OVERFLOW_DEFAULT = 10
DB_PORT_DEFAULT = 5432


class DatabaseSettings(BaseSettings):
    """PostgreSQL connection settings for the key component store."""

    model_config = SettingsConfigDict(env_prefix="KEYS_DB_")

    host: str = "localhost"
    port: int = DB_PORT_DEFAULT
    user: str = "keys"
    password: str = "keys"
    database: str = "keys"
    pool_size: int = DB_POOL_SIZE_DEFAULT
    max_overflow: int = DB_MAX_OVERFLOW_DEFAULT

    @property
    def async_url(self) -> str:
        """Build async PostgreSQL connection URL."""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class KeySettings(BaseSettings):
    """Key resolution settings."""

    model_config = SettingsConfigDict(env_prefix="KEYS_")

    fallback_rsa_key_size: int = FALLBACK_RSA_KEY_SIZE_DEFAULT
    fallback_hmac_secret_size: int = FALLBACK_HMAC_SECRET_SIZE_DEFAULT
    fallback_aes_secret_size: int = FALLBACK_AES_SECRET_SIZE_DEFAULT
    log_level: str = "INFO"
