# common/api_error/config_error.py
class ConfigurationError(RuntimeError):
    """
    Raised at startup when environment configuration is missing or invalid.
    The process is expected to exit.
    """

    pass


__all__ = ["ConfigurationError"]
