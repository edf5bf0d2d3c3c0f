"""Holder for the server-side secret token used to sign session identifiers."""

import logging
import secrets

from sessionkit.config.settings import Settings

logger = logging.getLogger(__name__)


class SecretToken:
    """Process-lifetime secret token.

    The token is read once from settings. When a deployment runs without one,
    ``regenerate`` installs a random ephemeral token that lives until the
    process exits; identifiers minted with it do not survive a restart.
    """

    def __init__(self, value: str = "") -> None:
        self._value = value

    @classmethod
    def from_settings(cls, settings: Settings) -> "SecretToken":
        """Create a token holder from the configured secret."""
        return cls(settings.secret_token.get_secret_value())

    @property
    def value(self) -> str:
        """The current token value (may be empty)."""
        return self._value

    def is_empty(self) -> bool:
        """Check whether no token is configured."""
        return not self._value

    def regenerate(self) -> str:
        """Replace the token with a fresh random one.

        Returns:
            The newly installed token.
        """
        self._value = secrets.token_hex(32)
        logger.debug("Installed ephemeral secret token")
        return self._value
