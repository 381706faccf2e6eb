"""
Websocket Handshake Protocol

Five message kinds for the pub-sub channel between a castle server and its
clients. Every message is a JSON object `{"method": ..., "params"?: {...}}`.

Validation is two-stage: `is_ws_message` only checks the envelope,
`is_known_method` then checks the method against the known kinds.
"""

import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from .base import CastleModel, to_wire
from .errors import UnknownMethodError

logger = logging.getLogger(__name__)


class WsMethod(str, Enum):
    """Known websocket message kinds."""
    WELCOME = "welcome"
    PING = "ping"
    PONG = "pong"
    SUBSCRIBE = "subscribe"
    PUBLISH = "publish"


WS_METHODS: dict[WsMethod, str] = {
    WsMethod.WELCOME: "Sent by the server right after a connection is accepted",
    WsMethod.PING: "Heartbeat request, answered with pong",
    WsMethod.PONG: "Heartbeat response",
    WsMethod.SUBSCRIBE: "Declares interest in a topic",
    WsMethod.PUBLISH: "Delivers one payload for a topic to its subscribers",
}


# ============================================================================
# Message envelope
# ============================================================================

class WsMessage(CastleModel):
    """Websocket message envelope; keys other than method and params are dropped."""

    model_config = ConfigDict(extra="ignore")

    method: str
    params: Optional[dict[str, Any]] = None


class SubscribeParams(CastleModel):
    topic: str


class PublishParams(CastleModel):
    topic: str
    data: Any = None


_ANY_DATA = TypeAdapter(Any)


def _wire_data(data: Any) -> Any:
    """Convert a publish payload to its JSON-compatible wire form."""
    if isinstance(data, BaseModel):
        return to_wire(data)
    return _ANY_DATA.dump_python(data, mode="json", by_alias=True)


def is_ws_message(value: Any) -> bool:
    """Check that a value is an object with a string `method`."""
    if isinstance(value, WsMessage):
        return True
    return isinstance(value, Mapping) and isinstance(value.get("method"), str)


def is_known_method(message: Any) -> bool:
    """Check that a well-formed message names a known method."""
    method = message.method if isinstance(message, WsMessage) else message["method"]
    return method in {m.value for m in WsMethod}


# ============================================================================
# Constructors
# ============================================================================

def msg_welcome() -> WsMessage:
    return WsMessage(method=WsMethod.WELCOME.value)


def msg_ping() -> WsMessage:
    return WsMessage(method=WsMethod.PING.value)


def msg_pong() -> WsMessage:
    return WsMessage(method=WsMethod.PONG.value)


def msg_subscribe(topic: str) -> WsMessage:
    """Create a subscription to a topic."""
    return WsMessage(
        method=WsMethod.SUBSCRIBE.value,
        params=to_wire(SubscribeParams(topic=topic)),
    )


def msg_publish(topic: str, data: Any) -> WsMessage:
    """Create a publication of one payload for a topic."""
    return WsMessage(
        method=WsMethod.PUBLISH.value,
        params=PublishParams(topic=topic, data=_wire_data(data)).model_dump(),
    )


def reply_to(message: WsMessage) -> Optional[WsMessage]:
    """Get the message answering `message`, if the protocol requires one."""
    if message.method == WsMethod.PING.value:
        return msg_pong()
    return None


# ============================================================================
# Wire format
# ============================================================================

def encode_message(message: WsMessage) -> str:
    """Serialize a message to JSON, omitting absent params."""
    payload: dict[str, Any] = {"method": message.method}
    if message.params is not None:
        payload["params"] = message.params
    return json.dumps(payload)


def decode_message(text: str) -> WsMessage:
    """
    Parse a websocket message.

    Raises:
        ValueError: text is not JSON or not a message envelope.
        UnknownMethodError: the envelope names an unknown method.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON message: {text[:100]}")
        raise ValueError(f"Invalid JSON message: {e}") from e

    if not is_ws_message(data):
        logger.warning(f"Not a websocket message: {text[:100]}")
        raise ValueError("Message must be an object with a string 'method'")

    try:
        message = WsMessage.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Malformed websocket envelope: {text[:100]}")
        raise ValueError(f"Malformed websocket envelope: {e}") from e

    if not is_known_method(message):
        logger.warning(f"Unknown websocket method: {message.method}")
        raise UnknownMethodError(message.method)

    logger.debug(f"Decoded websocket message: {message.method}")
    return message
