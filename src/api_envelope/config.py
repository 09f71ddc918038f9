from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Field names map to env vars case-insensitively (APP_TITLE, DOCS_ENABLED, ...).
    A .env file in the working directory is read as well, if present.
    """

    app_title: str = "Response Envelope API"

    # When False the app serves neither /docs nor /openapi.json
    docs_enabled: bool = True

    # Error message of the 404 envelope for unknown item ids
    not_found_message: str = "Item not found"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
