"""Downloader credentials model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, SecretStr


class Credentials(BaseModel):
    """Credentials and transport toggles handed to a protocol downloader.

    The password is a ``SecretStr`` so it never shows up in reprs or logs.
    Only ``identity_fields()`` exposes it, for folding into a resolver id.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = None
    password: SecretStr | None = None
    domain: str | None = None
    host_checking: bool = True
    ignore_certificate_validation: bool = True

    @property
    def secret(self) -> str | None:
        """Return the plain password, or None."""
        return self.password.get_secret_value() if self.password else None

    def identity_fields(self) -> list[Any]:
        """Return the fields that change what a fetch returns, in fixed order."""
        return [self.username, self.secret, self.domain]

    @property
    def anonymous(self) -> bool:
        return not any(self.identity_fields())
