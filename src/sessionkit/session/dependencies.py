"""FastAPI dependencies exposing the current session to route handlers."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from sessionkit.session.accessor import SessionAccessor
from sessionkit.session.state import PARAMS_SESSION_KEY, RequestParams, Session


def get_params(request: Request) -> RequestParams:
    params = getattr(request.state, "params", None)
    if params is None:
        raise HTTPException(status_code=500, detail="Session middleware not installed")
    return params


def get_accessor(request: Request) -> SessionAccessor:
    accessor = getattr(request.app.state, "session_accessor", None)
    if accessor is None:
        raise HTTPException(status_code=503, detail="Session accessor not initialised")
    return accessor


def get_session(params: Annotated[RequestParams, Depends(get_params)]) -> Session:
    session = params.get(PARAMS_SESSION_KEY)
    if session is None:
        raise HTTPException(status_code=500, detail="No session for request")
    return session


ParamsDep = Annotated[RequestParams, Depends(get_params)]
AccessorDep = Annotated[SessionAccessor, Depends(get_accessor)]
SessionDep = Annotated[Session, Depends(get_session)]
