"""Request-lifecycle hooks and the middleware that composes them."""

import logging
from collections.abc import Awaitable, Callable

from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from sessionkit.session.binder import CookieBinder
from sessionkit.session.state import PARAMS_SESSION_KEY, RequestParams, Session

logger = logging.getLogger(__name__)


class SessionHooks:
    """Hook bodies run around route handling.

    ``pre_match`` runs before the route is resolved and establishes the
    session. ``pre_response`` runs before the response is sent and makes sure
    the cookie carries the final session id.
    """

    def __init__(self, binder: CookieBinder) -> None:
        self._binder = binder

    @property
    def binder(self) -> CookieBinder:
        return self._binder

    def pre_match(
        self,
        request: Request,
        response: Response,
        params: RequestParams,
    ) -> tuple[Request, Response, RequestParams]:
        request, response, params, _ = self._binder.start(request, response, params)
        return request, response, params

    def pre_response(
        self,
        request: Request,
        response: Response,
        params: RequestParams,
    ) -> tuple[Request, Response, RequestParams]:
        session: Session | None = params.get(PARAMS_SESSION_KEY)
        if session is None:
            return request, response, params

        self._binder.bind(session.id, response)
        return request, response, params


class SessionMiddleware(BaseHTTPMiddleware):
    """Establishes a session for every HTTP request.

    The request parameters (current session and drained flash message) are
    exposed as ``request.state.params``. Add it once at application assembly::

        app.add_middleware(SessionMiddleware, hooks=SessionHooks(binder))
    """

    def __init__(self, app: ASGIApp, hooks: SessionHooks) -> None:
        super().__init__(app)
        self.hooks = hooks

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        # The handler's response doesn't exist yet; the binder writes onto a
        # placeholder and the final cookie is set in pre_response. Adapters may
        # block on I/O, so loading runs in the threadpool.
        params: RequestParams = {}
        request, _, params = await run_in_threadpool(
            self.hooks.pre_match, request, Response(), params
        )
        request.state.params = params

        response = await call_next(request)

        _, response, _ = self.hooks.pre_response(request, response, params)
        return response
