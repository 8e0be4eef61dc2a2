"""Vlang configuration settings."""

from typing import Dict, List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class VlangSettings(BaseSettings):
    """Runtime translation settings.

    Attributes:
        LOCALES: Enabled locales for the deployment. The first one is the
            default locale.
        COOKIE_NAME: Name under which the persisted locale suggestion is
            stored by the persistence collaborator.
        DEBUG: When True, missing keys render as a diagnostic string.
            When False, the raw key is returned instead.
        LOCALE_STRATEGY: "exact" looks the active locale up as-is in the
            message table. "best_match" scores the table's locales against
            the active locale and uses the closest one.
        WARN_UNKNOWN_LOCALE: Log a warning when a locale suggestion is
            discarded because it is not enabled.
        FILTERS: Language -> list of filter names applied when importing
            translated text.
    """

    LOCALES: List[str] = Field(default=["en"], alias="VLANG_LOCALES")
    COOKIE_NAME: str = Field(default="vlang", alias="VLANG_COOKIE_NAME")
    DEBUG: bool = Field(default=True, alias="VLANG_DEBUG")
    LOCALE_STRATEGY: Literal["exact", "best_match"] = Field(
        default="exact", alias="VLANG_LOCALE_STRATEGY"
    )
    WARN_UNKNOWN_LOCALE: bool = Field(default=False, alias="VLANG_WARN_UNKNOWN_LOCALE")
    FILTERS: Dict[str, List[str]] = Field(default={}, alias="VLANG_FILTERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Vlang configuration settings."""

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    vlang: VlangSettings

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        if "vlang" not in kwargs:
            kwargs["vlang"] = VlangSettings()

        super().__init__(**kwargs)

        logger.debug(
            "settings_loaded",
            locales=self.vlang.LOCALES,
            locale_strategy=self.vlang.LOCALE_STRATEGY,
        )


settings = Settings()
