from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

DEFAULT_PORT = 8010


def _origin(url: str) -> str:
    """Reduce a configured URL to the ``scheme://netloc`` form browsers send as Origin."""
    parsed = urlparse(url if "//" in url else f"//{url}")
    if not parsed.scheme:
        return f"http://{parsed.netloc}"
    return f"{parsed.scheme}://{parsed.netloc}"


class Settings(BaseSettings):
    # Database
    db_name: str = Field(alias="ECOM_ACCOUNT_SERVICE_DB_NAME")
    db_test_name: str = Field(alias="ECOM_ACCOUNT_SERVICE_DB_TEST_NAME")
    db_username: str = Field(alias="ECOM_ACCOUNT_SERVICE_DB_USERNAME")
    db_password: str = Field(alias="ECOM_ACCOUNT_SERVICE_DB_PASSWORD")
    db_host: str = Field(default="localhost", alias="ECOM_ACCOUNT_SERVICE_DB_HOST")
    db_port: int = Field(default=5432, alias="ECOM_ACCOUNT_SERVICE_DB_PORT")

    # Full SQLAlchemy URL; takes precedence over the parts above (tests use SQLite)
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")

    # JWT Configuration
    jwt_secret_key: str = Field(alias="ECOM_ACCOUNT_SERVICE_JWT_SECRET_KEY")

    # Service addresses
    service_url: str = Field(alias="ECOM_ACCOUNT_SERVICE_URL")
    frontend_url: str = Field(alias="ECOM_ACCOUNT_SERVICE_FRONTEND_URL")
    product_service_url: str = Field(alias="ECOM_ACCOUNT_SERVICE_PRODUCT_SERVICE_URL")

    @field_validator(
        "db_name",
        "db_test_name",
        "db_username",
        "jwt_secret_key",
        "service_url",
        "frontend_url",
        "product_service_url",
    )
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be set and non-empty")
        return v.strip()

    @field_validator("database_url_override", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None so a blank DATABASE_URL means no override."""
        if v == "":
            return None
        return v

    def _postgres_url(self, database: str) -> str:
        return URL.create(
            "postgresql+psycopg",
            username=self.db_username,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=database,
        ).render_as_string(hide_password=False)

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return self._postgres_url(self.db_name)

    @property
    def test_database_url(self) -> str:
        return self._postgres_url(self.db_test_name)

    @property
    def bind_host(self) -> str:
        parsed = urlparse(self.service_url if "//" in self.service_url else f"//{self.service_url}")
        return parsed.hostname or "0.0.0.0"

    @property
    def bind_port(self) -> int:
        parsed = urlparse(self.service_url if "//" in self.service_url else f"//{self.service_url}")
        return parsed.port or DEFAULT_PORT

    @property
    def frontend_origin(self) -> str:
        return _origin(self.frontend_url)

    @property
    def product_service_origin(self) -> str:
        return _origin(self.product_service_url)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Build the settings once per process; a missing variable raises here at startup."""
    return Settings()
