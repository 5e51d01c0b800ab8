# dexgraph/config.py
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_BLOB_CACHE_SIZE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_USER_AGENT,
    POKEAPI_BASE_URL,
)
from .exceptions import ConfigurationError
from .types import PostRequestHook, PreRequestHook


class DexGraphSettings(BaseSettings):
    """
    User-configurable settings for the dexgraph client, loaded from
    environment variables prefixed with ``DEXGRAPH_`` or from a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DEXGRAPH_",
        extra="ignore",
        case_sensitive=False,
        arbitrary_types_allowed=True,  # Allow hook callables
    )

    # --- Transport Settings ---
    base_url: str = Field(
        default=POKEAPI_BASE_URL, description="Base URL of the PokéAPI service"
    )
    request_timeout: float = Field(
        default=30.0, description="Default request timeout in seconds"
    )
    max_retries: int = Field(
        default=3, description="Maximum number of retries for failed requests"
    )
    backoff_factor: float = Field(
        default=0.5, description="Backoff factor for retries (seconds)"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User-Agent header for requests",
    )

    # --- Listing Settings ---
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Number of entries requested per listing page",
    )

    # --- Caching Settings ---
    cache_max_size: int = Field(
        default=0,
        description="Maximum number of settled resources kept in memory (0 = unbounded)",
    )
    cache_dir: Path | None = Field(
        default=None,
        description="Directory for the on-disk response cache (disabled when unset)",
    )
    blob_cache_size: int = Field(
        default=DEFAULT_BLOB_CACHE_SIZE,
        description="Maximum number of binary payloads (sprites) kept in memory",
    )

    # --- Hook Settings ---
    pre_request_hooks: list[PreRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call before a request is made.",
    )
    post_request_hooks: list[PostRequestHook] = Field(
        default_factory=list,
        description="List of hooks to call after a successful response.",
    )

    def check(self) -> "DexGraphSettings":
        """Validates value ranges that pydantic types cannot express.

        Raises:
            ConfigurationError: If any setting is out of range.
        """
        if self.request_timeout <= 0:
            raise ConfigurationError("request_timeout must be positive.")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must not be negative.")
        if self.page_size < 1:
            raise ConfigurationError("page_size must be at least 1.")
        if self.cache_max_size < 0:
            raise ConfigurationError("cache_max_size must not be negative.")
        if self.blob_cache_size < 1:
            raise ConfigurationError("blob_cache_size must be at least 1.")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"base_url must be an http(s) URL, got {self.base_url!r}."
            )
        return self


@lru_cache
def get_settings() -> DexGraphSettings:
    """
    Provides access to the dexgraph settings.

    Settings are loaded from environment variables or a .env file. The
    instance is cached for performance.

    Returns:
        DexGraphSettings: The settings instance.
    """
    return DexGraphSettings()
