from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.enums import WindowUnit
from .urls import DEFAULT_API_URL


class AppConfig(BaseSettings):
    """Client configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the CRPT_API_ prefix.
    For example:
        - CRPT_API_API_URL=https://example.test/documents/create
        - CRPT_API_REQUEST_LIMIT=10
        - CRPT_API_WINDOW_UNIT=minutes
        - CRPT_API_HTTP_TIMEOUT_SECONDS=5

    Values passed to CrptApiClient take precedence over the environment.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRPT_API_",
        case_sensitive=False,
        extra="forbid",
    )

    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Document registration endpoint",
    )

    request_limit: int = Field(
        default=1,
        ge=1,
        description="Maximum number of permits (submission attempts) per window",
    )

    window_unit: WindowUnit = Field(
        default=WindowUnit.SECONDS,
        description="Time unit of the replenishment window",
    )

    window_length: int = Field(
        default=1,
        ge=1,
        description="Window length in window_unit; permits are replenished once per window",
    )

    initial_delay_seconds: Optional[float] = Field(
        default=None,
        ge=0,
        description="Delay before the first replenishment tick. If None, one window",
    )

    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Per-call HTTP timeout, independent of the window",
    )

    hold_permits_until_window: bool = Field(
        default=False,
        description="Keep each permit consumed until the next replenishment instead of releasing it after the call",
    )

    signature_header: Optional[str] = Field(
        default=None,
        description="If set, the document signature is sent in this HTTP header",
    )

    @field_validator("window_unit", mode="before")
    @classmethod
    def _parse_window_unit(cls, value: object) -> object:
        if isinstance(value, str) and not isinstance(value, WindowUnit):
            return WindowUnit.from_str(value)
        return value
