"""Request and response bodies for the session API."""

from typing import Any

from pydantic import BaseModel, Field


class SessionView(BaseModel):
    """The current session as returned to clients."""

    id: str
    data: dict[str, Any] = Field(default_factory=dict)


class ValueBody(BaseModel):
    """Body for storing a single session value."""

    value: Any


class KeyValue(BaseModel):
    key: str
    value: Any


class FlashBody(BaseModel):
    """Body for setting a flash message."""

    message: str = Field(min_length=1, max_length=1000)


class FlashView(BaseModel):
    flash: Any = ""
    has_flash: bool = False
