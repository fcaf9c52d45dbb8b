"""Configuration settings for the PHP extension catalog server."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """phpext-mcp configuration.

    Environment variables:
    - PHPEXT_LOG_LEVEL: loguru level for the stderr sink (default: INFO)
    - PHPEXT_MAX_RESULTS: Cap on records returned by list-style tool
        actions (0 = unlimited, default)
    - PHPEXT_POPULAR_LIMIT: Default size of the popularity ranking (default: 10)
    - PHPEXT_INDENT: JSON indentation of tool output (default: 2)
    """

    # Output
    max_results: int = 0
    popular_limit: int = 10
    indent: int = 2

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "PHPEXT_", "case_sensitive": False}

    def cap(self, items: list) -> list:
        """Apply MAX_RESULTS to a result list."""
        if self.max_results > 0:
            return items[: self.max_results]
        return items


settings = Settings()
