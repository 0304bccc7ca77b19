# common/config/initialize_config.py
"""
Startup entry point for configuration.

    load_dotenv()
    config = initialize_config()   # validates env, configures structlog
    ...
    get_config().booking.enforce_unique_slot
"""
from typing import Optional
from pydantic import ValidationError
from .app_config import AppConfig, load_app_config
from .structlog_config import configure_structlog, get_logger
from common.api_error import ConfigurationError

_config: Optional[AppConfig] = None


def _format_validation_error(e: ValidationError) -> str:
    lines = [
        f"  - {'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
        for error in e.errors()
    ]
    return "\n".join(lines)


def initialize_config() -> AppConfig:
    """
    Validate the environment once per process and configure logging from it.
    Later calls return the stored configuration.

    Raises:
        ConfigurationError: Missing or invalid settings
    """
    global _config
    if _config is not None:
        return _config

    try:
        config = load_app_config()
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed:\n" + _format_validation_error(e)
        ) from e
    except ValueError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e

    configure_structlog(config.logging.level_int, json_output=config.logging.json_output)
    _config = config

    get_logger(__name__).info(
        "Configuration loaded",
        environment=config.environment,
        database=config.database.driver.value if config.database else None,
        asset_uploads=config.assets is not None,
        unique_slots=config.booking.enforce_unique_slot,
    )
    return config


def get_config() -> AppConfig:
    """
    Raises:
        RuntimeError: initialize_config() has not run in this process
    """
    if _config is None:
        raise RuntimeError(
            "Configuration not initialized. Call initialize_config() at startup."
        )
    return _config


__all__ = ["initialize_config", "get_config"]
