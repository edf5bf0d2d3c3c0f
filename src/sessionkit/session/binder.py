"""Binding of session identifiers to clients through cookies."""

import logging

from starlette.requests import Request
from starlette.responses import Response

from sessionkit.config.settings import CookieOptions
from sessionkit.observability.audit import SessionAuditLogger
from sessionkit.session.accessor import SessionAccessor
from sessionkit.session.flash import drain_flash
from sessionkit.session.identifier import IdentifierGenerator, response_cookies
from sessionkit.session.state import PARAMS_SESSION_KEY, RequestParams, Session

logger = logging.getLogger(__name__)


class CookieBinder:
    """Resolves the session id for a request and writes it onto the response.

    The cookie name comes from the identifier generator; attributes come from
    the ``CookieOptions`` given at construction unless overridden per call.
    """

    def __init__(
        self,
        generator: IdentifierGenerator,
        accessor: SessionAccessor,
        cookie_options: CookieOptions | None = None,
        audit: SessionAuditLogger | None = None,
    ) -> None:
        self._generator = generator
        self._accessor = accessor
        self._cookie_options = cookie_options or CookieOptions()
        self._audit = audit

    @property
    def cookie_name(self) -> str:
        return self._generator.cookie_name

    @property
    def cookie_options(self) -> CookieOptions:
        return self._cookie_options

    @property
    def accessor(self) -> SessionAccessor:
        return self._accessor

    def bind(
        self,
        session_id: str,
        response: Response,
        options: CookieOptions | None = None,
    ) -> Response:
        """Set the session cookie on ``response``."""
        options = options or self._cookie_options
        response.set_cookie(self.cookie_name, session_id, **options.as_kwargs())
        return response

    def start_with_id(
        self,
        session_id: str,
        request: Request,
        response: Response,
        options: CookieOptions | None = None,
    ) -> tuple[Session, Response]:
        """Start a session with a known id.

        Args:
            session_id: The session id to bind.
            request: The request object.
            response: The response to carry the cookie.
            options: Cookie attributes; defaults to the binder's options.

        Returns:
            The loaded session and the mutated response.
        """
        self.bind(session_id, response, options)
        return self._accessor.adapter.load(session_id), response

    def start(
        self,
        request: Request,
        response: Response,
        params: RequestParams | None = None,
        options: CookieOptions | None = None,
    ) -> tuple[Request, Response, RequestParams, Session]:
        """Establish the session for a request.

        Resolves the id from the request cookie, then the response cookie,
        minting a new one if neither is set. The session is loaded, stored in
        ``params`` and any pending flash message is drained into ``params``.

        Returns:
            The request, the mutated response, the enriched params and the
            session.
        """
        if params is None:
            params = {}

        cookie_present = bool(request.cookies.get(self.cookie_name))
        session_id = self._generator.resolve_id(
            request.cookies,
            response_cookies(response),
            accept=self._accessor.adapter.accepts_id,
        )
        session, response = self.start_with_id(session_id, request, response, options)

        params[PARAMS_SESSION_KEY] = session
        flash = drain_flash(session, params, self._accessor)

        if self._audit:
            self._audit.log_session_started(session.id, cookie_present=cookie_present)
            if flash != "":
                self._audit.log_flash_drained(session.id, len(str(flash)))

        return request, response, params, session
