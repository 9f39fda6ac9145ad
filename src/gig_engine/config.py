"""Project configuration system.

Settings are loaded from environment variables (prefix ``GE_``) and,
optionally, a ``.env`` file in the working directory.

Example .env
------------
GE_CLOSING_SOON_DAYS=3
GE_NEW_WINDOW_DAYS=2
GE_STRICT_DATES=false
GE_DEFAULT_SORT=priority
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    All fields can be overridden via environment variables with the
    ``GE_`` prefix (case-insensitive), e.g. ``GE_STRICT_DATES=true``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GE_",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Classification thresholds ------------------------------------
    closing_soon_days: int = Field(
        default=3,
        ge=0,
        description="Deadlines this many days out (or fewer) are CLOSING SOON.",
    )

    new_window_days: int = Field(
        default=2,
        ge=0,
        description="Gigs posted this many days ago (or fewer) are NEW.",
    )

    # --- Date handling ------------------------------------------------
    strict_dates: bool = Field(
        default=False,
        description=(
            "Reject unparseable posted dates / deadlines instead of "
            "treating them as missing."
        ),
    )

    # --- Presentation -------------------------------------------------
    default_sort: str = Field(
        default="priority",
        description="Sort order used by the CLI when --sort is not given.",
    )


# ---------------------------------------------------------------------------
# Module-level singleton with lazy initialisation
# ---------------------------------------------------------------------------

_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the application-wide Settings singleton.

    Instantiated lazily on first call so that tests can patch environment
    variables before the object is constructed.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Discard the cached singleton.

    Intended for use in tests that need to vary environment variables
    between test cases.
    """
    global _settings
    _settings = None
