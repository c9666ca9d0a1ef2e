"""Credential provider port."""

from typing import Protocol


class CredentialProvider(Protocol):
    """Port for reading the API credential."""

    def get_api_key(self) -> str:
        """Return the API key, or an empty string when unconfigured."""
        ...
