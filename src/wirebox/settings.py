from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENTRY_POINT_GROUP = "wirebox.providers"


class ContainerSettings(BaseSettings):
    """Configure container construction from ``WIREBOX_*`` environment variables.

    Examples:
        .. code-block:: bash

            WIREBOX_DISCOVER_PROVIDERS=false
            WIREBOX_ENTRY_POINT_GROUP=myapp.providers
            WIREBOX_LOG_LEVEL=DEBUG

    """

    model_config = SettingsConfigDict(env_prefix="WIREBOX_", extra="ignore")

    discover_providers: bool = True
    """Register providers advertised by installed packages on construction."""

    entry_point_group: str = DEFAULT_ENTRY_POINT_GROUP
    """Entry-point group scanned for service providers."""

    log_level: str | None = None
    """Level applied to the ``wirebox`` logger; left untouched when unset."""

    def apply_log_level(self) -> None:
        if self.log_level is not None:
            logging.getLogger("wirebox").setLevel(self.log_level.upper())


__all__ = ["DEFAULT_ENTRY_POINT_GROUP", "ContainerSettings"]
