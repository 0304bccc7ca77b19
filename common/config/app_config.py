# common/config/app_config.py
"""
Complete application configuration with validation.

Every section is a frozen pydantic model built from environment variables
once at startup. Invalid values fail fast with a ConfigurationError.
"""

from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator, model_validator, SecretStr
from .config_types import EnvBool, EnvLogLevel, DbDriver, SslMode, Environment
from .env_config import require_env, get_env
from .logging_config import LoggingConfig
from pathlib import Path


class DatabaseConfig(BaseModel):
    """
    Record store connection settings.

    Either a full `url` (used as-is, e.g. sqlite+aiosqlite:///./hospital.db)
    or host/port/name parts that are assembled into a PostgreSQL URL.
    """

    url: Optional[str] = Field(default=None, min_length=1)

    host: Optional[str] = Field(default=None, min_length=1)
    port: Optional[int] = Field(default=None, gt=0, le=65535)
    name: Optional[str] = Field(default=None, min_length=1, description="Database name")
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[SecretStr] = Field(default=None)  # Pydantic hides this in logs

    # Connection pooling
    pool_size: int = Field(default=10, ge=1, le=100)
    max_overflow: int = Field(default=20, ge=0, le=100)
    pool_timeout: int = Field(default=30, ge=1, le=300)
    pool_recycle: int = Field(default=3600, ge=300)  # Min 5 minutes

    ssl_mode: Optional[SslMode] = Field(default=None)
    ssl_ca_path: Optional[Path] = Field(default=None)

    driver: DbDriver = Field(default=DbDriver.ASYNCPG)

    # Create tables on startup instead of checking Alembic revisions
    auto_create: bool = Field(default=False)

    model_config = {"frozen": True}

    @field_validator("ssl_ca_path")
    @classmethod
    def validate_ssl_paths(cls, v: Optional[Path]) -> Optional[Path]:
        """Validate SSL certificate paths exist."""
        if v is not None and not v.exists():
            raise ValueError(f"SSL file not found: {v}")
        return v

    @model_validator(mode="after")
    def validate_target(self) -> "DatabaseConfig":
        if self.url:
            return self
        if not (self.host and self.port and self.name):
            raise ValueError("Either DB_URL or DB_HOST/DB_PORT/DB_NAME is required")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.get_connection_url().startswith("sqlite")

    def get_connection_url(self, include_password: bool = False) -> str:
        """
        Build SQLAlchemy connection URL.

        Args:
            include_password: If True, include password in URL (use for actual connections)
                            If False, mask it (use for logging)
        """
        if self.url:
            return self.url

        if self.username:
            if include_password and self.password:
                auth = f"{self.username}:{self.password.get_secret_value()}"
            else:
                auth = f"{self.username}:****"
            return f"postgresql+{self.driver.value}://{auth}@{self.host}:{self.port}/{self.name}"

        return f"postgresql+{self.driver.value}://{self.host}:{self.port}/{self.name}"

    def to_dict_safe(self) -> dict[str, Any]:
        """Convert to dict with sensitive data masked (safe for logging)."""
        data = self.model_dump()
        if data.get("password"):
            data["password"] = "****"
        return data


class AuthConfig(BaseModel):
    """
    Verification settings for tokens issued by the external auth provider.
    """

    jwt_secret: SecretStr
    jwt_algorithm: str = Field(default="HS256", pattern=r"^(HS256|HS384|HS512)$")
    admin_claim: str = Field(default="admin", min_length=1)

    model_config = {"frozen": True}


class AssetUploadConfig(BaseModel):
    """Hosted asset service used for doctor/service images."""

    cloud_name: str = Field(..., min_length=1)
    upload_preset: str = Field(..., min_length=1)
    base_url: str = Field(default="https://api.cloudinary.com/v1_1")
    delivery_url: str = Field(default="https://res.cloudinary.com")
    timeout: float = Field(default=30.0, gt=0, le=300)

    model_config = {"frozen": True}

    @property
    def upload_endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.cloud_name}/image/upload"


class BookingConfig(BaseModel):
    """Booking policy switches."""

    # Off: two patients may request the same doctor/date/time and an admin
    # reconciles when confirming.
    enforce_unique_slot: bool = False

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """
    Complete application configuration.

    All configuration is loaded from environment variables and validated
    at startup. Invalid configuration will fail fast with clear error messages.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")  # Semantic versioning
    environment: str = Field(..., pattern="^(development|staging|production)$")

    logging: LoggingConfig
    auth: AuthConfig
    booking: BookingConfig = Field(default_factory=BookingConfig)
    database: Optional[DatabaseConfig] = None
    assets: Optional[AssetUploadConfig] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        if self.environment == "production":
            if self.database is None:
                raise ValueError("Database config required in production")
            if self.logging.log_level == EnvLogLevel.DEBUG:
                raise ValueError("DEBUG log level not allowed in production")
        return self


def _parse_bool(name: str, default: str = "false") -> bool:
    raw = get_env(name, default) or default
    try:
        return EnvBool.parse(raw)
    except ValueError:
        raise ValueError(f"Invalid {name}: {raw}. Must be 'true' or 'false'")


def load_database_config(environment: Environment) -> Optional[DatabaseConfig]:
    """
    Load database configuration from environment.

    Environment variables:
    - DB_URL: full SQLAlchemy URL; when set the DB_HOST group is ignored
    - DB_HOST, DB_PORT, DB_NAME: PostgreSQL location
    - DB_USER, DB_PASSWORD, DB_SSL_MODE: required in production
    - DB_POOL_SIZE, DB_MAX_OVERFLOW, DB_POOL_TIMEOUT, DB_POOL_RECYCLE: optional
    - DB_SSL_CA: optional CA bundle path
    - DB_AUTO_CREATE: create tables at startup (true/false)
    """
    url = get_env("DB_URL")
    host = get_env("DB_HOST")
    if not url and not host:
        return None

    auto_create = _parse_bool("DB_AUTO_CREATE")
    pool: dict[str, int] = {}
    for env_key, field in (
        ("DB_POOL_SIZE", "pool_size"),
        ("DB_MAX_OVERFLOW", "max_overflow"),
        ("DB_POOL_TIMEOUT", "pool_timeout"),
        ("DB_POOL_RECYCLE", "pool_recycle"),
    ):
        value = get_env(env_key)
        if value is not None:
            pool[field] = int(value)

    if url:
        if url.startswith("sqlite"):
            driver = DbDriver.AIOSQLITE
        else:
            driver = DbDriver.ASYNCPG
        return DatabaseConfig(url=url, driver=driver, auto_create=auto_create, **pool)

    driver_str = get_env("DB_DRIVER", DbDriver.ASYNCPG.value) or DbDriver.ASYNCPG.value
    try:
        driver = DbDriver(driver_str)
    except ValueError:
        valid_drivers = [d.value for d in DbDriver]
        raise ValueError(
            f"Invalid DB_DRIVER: {driver_str}. Must be one of: {valid_drivers}"
        )

    if environment.is_production:
        # Production: credentials are REQUIRED
        username = require_env("DB_USER")
        password_str: Optional[str] = require_env("DB_PASSWORD")
        ssl_mode_str: Optional[str] = require_env("DB_SSL_MODE")
    else:
        username = get_env("DB_USER")
        password_str = get_env("DB_PASSWORD")
        ssl_mode_str = get_env("DB_SSL_MODE")

    ssl_mode: Optional[SslMode] = None
    if ssl_mode_str:
        try:
            ssl_mode = SslMode(ssl_mode_str)
        except ValueError:
            valid_modes = [m.value for m in SslMode]
            raise ValueError(
                f"Invalid DB_SSL_MODE: {ssl_mode_str}. Must be one of: {valid_modes}"
            )

    ssl_ca = get_env("DB_SSL_CA")

    return DatabaseConfig(
        host=host,
        port=int(require_env("DB_PORT")),
        name=require_env("DB_NAME"),
        username=username,
        password=SecretStr(password_str) if password_str else None,
        ssl_mode=ssl_mode,
        ssl_ca_path=Path(ssl_ca) if ssl_ca else None,
        driver=driver,
        auto_create=auto_create,
        **pool,
    )


def load_auth_config() -> AuthConfig:
    return AuthConfig(
        jwt_secret=SecretStr(require_env("AUTH_JWT_SECRET")),
        jwt_algorithm=get_env("AUTH_JWT_ALGORITHM", "HS256"),
        admin_claim=get_env("AUTH_ADMIN_CLAIM", "admin"),
    )


def load_asset_upload_config() -> Optional[AssetUploadConfig]:
    """
    Asset uploads are optional; without ASSET_CLOUD_NAME the upload
    endpoint answers 502.
    """
    cloud_name = get_env("ASSET_CLOUD_NAME")
    if not cloud_name:
        return None

    extras: dict[str, Any] = {}
    if get_env("ASSET_UPLOAD_BASE_URL"):
        extras["base_url"] = get_env("ASSET_UPLOAD_BASE_URL")
    if get_env("ASSET_UPLOAD_TIMEOUT"):
        extras["timeout"] = float(require_env("ASSET_UPLOAD_TIMEOUT"))

    return AssetUploadConfig(
        cloud_name=cloud_name,
        upload_preset=require_env("ASSET_UPLOAD_PRESET"),
        **extras,
    )


def load_booking_config() -> BookingConfig:
    return BookingConfig(
        enforce_unique_slot=_parse_bool("BOOKING_ENFORCE_UNIQUE_SLOT"),
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    from .logging_config import load_logging_config

    env_str = require_env("ENVIRONMENT")

    try:
        environment = Environment(env_str)
    except ValueError:
        valid_envs = [e.value for e in Environment]
        raise ValueError(
            f"Invalid ENVIRONMENT: {env_str}. Must be one of: {valid_envs}"
        )

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment.value,
        logging=load_logging_config(),
        auth=load_auth_config(),
        booking=load_booking_config(),
        database=load_database_config(environment),
        assets=load_asset_upload_config(),
    )


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "AuthConfig",
    "AssetUploadConfig",
    "BookingConfig",
    "load_database_config",
    "load_auth_config",
    "load_asset_upload_config",
    "load_booking_config",
    "load_app_config",
]
