"""HTTP endpoints for reading and writing the current session.

Every route runs behind ``SessionMiddleware``, so the session is already
established and any pending flash message has been drained when a handler
runs. Handlers that write through the adapter are plain functions so FastAPI
runs them in its threadpool.
"""

import logging

from fastapi import APIRouter, HTTPException, Response

from sessionkit.api.models import FlashBody, FlashView, KeyValue, SessionView, ValueBody
from sessionkit.session.dependencies import AccessorDep, ParamsDep, SessionDep
from sessionkit.session.flash import get_flash, has_flash, set_flash
from sessionkit.session.state import FLASH_KEY

logger = logging.getLogger(__name__)

session_router = APIRouter(tags=["Session"])


@session_router.get("/session", response_model=SessionView)
async def read_session(session: SessionDep) -> SessionView:
    """Return the current session id and data."""
    return SessionView(id=session.id, data=session.data)


@session_router.get("/session/{key}", response_model=KeyValue)
def read_value(key: str, session: SessionDep, accessor: AccessorDep) -> KeyValue:
    if not accessor.isset(session, key):
        raise HTTPException(status_code=404, detail=f"Session key '{key}' is not set")
    return KeyValue(key=key, value=accessor.get(session, key))


@session_router.put("/session/{key}", response_model=KeyValue)
def write_value(
    key: str,
    body: ValueBody,
    session: SessionDep,
    accessor: AccessorDep,
) -> KeyValue:
    """Store a value on the current session."""
    if key == FLASH_KEY:
        raise HTTPException(status_code=400, detail="Use /flash to set flash messages")
    accessor.set(session, key, body.value)
    return KeyValue(key=key, value=body.value)


@session_router.delete("/session/{key}", status_code=204)
def delete_value(key: str, session: SessionDep, accessor: AccessorDep) -> Response:
    accessor.unset(session, key)
    return Response(status_code=204)


@session_router.post("/flash", response_model=FlashView)
def write_flash(body: FlashBody, params: ParamsDep, accessor: AccessorDep) -> FlashView:
    """Set a flash message, visible now and on the next request only."""
    set_flash(params, body.message, accessor)
    return FlashView(flash=get_flash(params), has_flash=has_flash(params))


@session_router.get("/flash", response_model=FlashView)
async def read_flash(params: ParamsDep) -> FlashView:
    """Return the flash message drained for this request."""
    return FlashView(flash=get_flash(params), has_flash=has_flash(params))
