"""argmatch configuration settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """argmatch ambient configuration settings.

    Only covers the concerns of the library itself (logging). Command line
    style is configured per parser through ``StyleConfig``, never through the
    environment.

    Environment Variables:
        ARGMATCH_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        ARGMATCH_JSON_LOGS: Render logs as JSON instead of console output

    Example:
        ```python
        from argmatch.configuration import settings

        if settings.is_production:
            # JSON logs...
        ```
    """

    LOG_LEVEL: str = "WARNING"
    JSON_LOGS: bool = False

    @property
    def is_production(self) -> bool:
        """Check if logs should be rendered for machine consumption.

        Returns:
            True if JSON_LOGS is set, False otherwise.
        """
        return self.JSON_LOGS

    model_config = SettingsConfigDict(
        env_prefix="ARGMATCH_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
