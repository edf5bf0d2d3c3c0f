"""Session identifier generation and cookie-based resolution."""

import hashlib
import logging
import secrets
from collections.abc import Callable, Mapping
from http.cookies import CookieError, SimpleCookie

from starlette.responses import Response

from sessionkit.config.secrets import SecretToken
from sessionkit.observability.audit import SessionAuditLogger
from sessionkit.session.errors import ConfigurationError

logger = logging.getLogger(__name__)


class IdentifierGenerator:
    """Produces unguessable session identifiers.

    Each identifier is the hex SHA-256 digest of the secret token concatenated
    with a fresh 128-bit value from the OS CSPRNG.
    """

    def __init__(
        self,
        secret: SecretToken,
        cookie_name: str = "__geniesid",
        production: bool = False,
        audit: SessionAuditLogger | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            secret: Holder for the server-side secret token.
            cookie_name: Name of the cookie carrying the session id.
            production: Whether this is a production deployment.
            audit: Optional audit logger for identifier events.
        """
        self._secret = secret
        self._cookie_name = cookie_name
        self._production = production
        self._audit = audit

    @property
    def cookie_name(self) -> str:
        """Name of the cookie carrying the session id."""
        return self._cookie_name

    def ensure_secret(self) -> None:
        """Make sure a secret token is available.

        Raises:
            ConfigurationError: If no token is configured in production.
        """
        if not self._secret.is_empty():
            return

        if self._production:
            raise ConfigurationError("no secret token configured")

        logger.warning("Empty secret token; using a temporary token")
        self._secret.regenerate()
        if self._audit:
            self._audit.log_ephemeral_secret()

    def new_id(self) -> str:
        """Generate a new session id.

        Returns:
            A 64 character lowercase hex string.

        Raises:
            ConfigurationError: If no secret token is configured in production.
        """
        self.ensure_secret()

        payload = self._secret.value + str(secrets.randbits(128))
        session_id = hashlib.sha256(payload.encode("utf-8")).hexdigest()

        if self._audit:
            self._audit.log_id_minted(session_id)

        return session_id

    def resolve_id(
        self,
        request_cookies: Mapping[str, str] | None,
        response_cookies: Mapping[str, str] | None = None,
        accept: Callable[[str], bool] | None = None,
    ) -> str:
        """Find the session id carried by the request or response.

        The request cookie takes precedence over the response cookie. A new id
        is generated when neither holds a non-empty value.

        Args:
            request_cookies: Cookies sent by the client.
            response_cookies: Cookies already set on the outgoing response.
            accept: Optional check for ids the storage backend can hold;
                rejected cookie values are treated as absent.

        Returns:
            The resolved or newly generated session id.
        """
        for cookies in (request_cookies, response_cookies):
            if not cookies:
                continue
            value = cookies.get(self._cookie_name)
            if not value:
                continue
            if accept is not None and not accept(value):
                logger.info("Ignoring session cookie the store cannot hold; minting a new id")
                continue
            return value

        return self.new_id()


def response_cookies(response: Response) -> dict[str, str]:
    """Collect the cookies set on a response via ``Set-Cookie`` headers.

    Later headers override earlier ones for the same cookie name.

    Args:
        response: The outgoing response.

    Returns:
        Mapping of cookie name to value.
    """
    cookies: dict[str, str] = {}
    for header in response.headers.getlist("set-cookie"):
        jar: SimpleCookie = SimpleCookie()
        try:
            jar.load(header)
        except CookieError:
            logger.debug("Ignoring malformed Set-Cookie header: %s", header)
            continue
        for name, morsel in jar.items():
            cookies[name] = morsel.value
    return cookies
