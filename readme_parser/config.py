"""Parser configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Parser settings loaded from environment variables.

    Settings are loaded in this priority order (highest to lowest):
    1. Environment variables (prefixed with README_PARSER_)
    2. .env file (for local development)
    3. Default values

    List values are read from the environment as JSON, e.g.
    README_PARSER_IGNORE_TAGS='["featured", "sticky"]'.
    """

    model_config = SettingsConfigDict(
        env_prefix="README_PARSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Header sanitization
    # =========================================================================
    ignore_tags: list[str] = Field(
        default_factory=list,
        description="Tags removed from the Tags header",
    )

    # Host "current stable" branch (e.g. "6.4"). Requires/Tested values above
    # this branch + 0.1 are ignored with a warning.
    core_stable_branch: str | None = Field(
        default=None,
        description="Upper bound used to validate Requires/Tested headers",
    )

    # =========================================================================
    # Rendering
    # =========================================================================
    short_description_length: int = Field(
        default=150,
        ge=1,
        description="Maximum length of the short description before truncation",
    )

    markdown_extras: list[str] = Field(
        default_factory=lambda: ["fenced-code-blocks", "tables", "footnotes"],
        description="markdown2 extras enabled when rendering sections",
    )


settings = Settings()
