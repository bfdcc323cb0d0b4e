"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and RAVENFETCH_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from ravenfetch.core.properties import PropertySource


class ResolverSettings(BaseSettings):
    """Resolver settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export RAVENFETCH_DOWNLOAD_ROOT=/var/cache/ravenfetch
        export RAVENFETCH_LOG_LEVEL=DEBUG
        export RAVENFETCH_PROPERTIES_FILE=~/.ravenfetch.properties
        export RAVENFETCH_PROPERTIES='{"http.username": "deployer"}'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RAVENFETCH_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    download_root: Path = Path(".ravenfetch/downloads")
    base_dir: Path | None = None
    log_level: str = "INFO"

    # Credential defaults, see ravenfetch.core.properties
    properties_file: Path | None = None
    properties: dict[str, str] = {}

    def property_source(self) -> PropertySource:
        """Merge the properties file (if any) with inline properties.

        Inline properties win over the file.
        """
        source = PropertySource()
        if self.properties_file is not None:
            source = PropertySource.from_file(self.properties_file.expanduser())
        return source.merged(self.properties)
