"""Messages exchanged with the chat server over the websocket."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ProtocolError(ValueError):
    """Raised when a message does not match the wire format."""


class MsgType(str, Enum):
    USERS = "users"
    REGISTER = "register"
    MESSAGE = "message"


def _load_object(text: str) -> dict[str, Any]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProtocolError(f"invalid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise ProtocolError("expected a JSON object")
    return value


def _optional_str(obj: dict[str, Any], key: str) -> str | None:
    value = obj.get(key)
    if value is not None and not isinstance(value, str):
        raise ProtocolError(f"field {key!r} must be a string or null")
    return value


def _required_str(obj: dict[str, Any], key: str) -> str:
    if key not in obj:
        raise ProtocolError(f"missing field {key!r}")
    value = obj[key]
    if not isinstance(value, str):
        raise ProtocolError(f"field {key!r} must be a string")
    return value


@dataclass
class WebSocketMessage:
    """An envelope carrying a message type and an optional payload."""

    message_type: MsgType
    data_array: list[str] | None = None
    data: str | None = None

    def to_json(self) -> str:
        return json.dumps(
            {
                "messageType": self.message_type.value,
                "dataArray": self.data_array,
                "data": self.data,
            },
            separators=(",", ":"),
            ensure_ascii=False,
        )

    @classmethod
    def from_json(cls, text: str) -> WebSocketMessage:
        obj = _load_object(text)
        if "messageType" not in obj:
            raise ProtocolError("missing field 'messageType'")
        try:
            message_type = MsgType(obj["messageType"])
        except ValueError as exc:
            raise ProtocolError(f"unknown message type {obj['messageType']!r}") from exc
        data_array = obj.get("dataArray")
        if data_array is not None:
            if not isinstance(data_array, list) or not all(
                isinstance(item, str) for item in data_array
            ):
                raise ProtocolError("field 'dataArray' must be a list of strings or null")
        return cls(message_type, data_array, _optional_str(obj, "data"))


@dataclass
class MessageData:
    """A chat line: who sent it and what it says."""

    sender: str
    message: str

    @classmethod
    def from_json(cls, text: str) -> MessageData:
        obj = _load_object(text)
        return cls(_required_str(obj, "from"), _required_str(obj, "message"))