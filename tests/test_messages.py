from __future__ import annotations

import json
import logging
from datetime import datetime

import pytest

from castle.schemas import to_wire
from castle.schemas.datapoints import DatapointState
from castle.schemas.errors import UnknownMethodError
from castle.schemas.messages import (
    WsMessage,
    WsMethod,
    decode_message,
    encode_message,
    is_known_method,
    is_ws_message,
    msg_ping,
    msg_pong,
    msg_publish,
    msg_subscribe,
    msg_welcome,
    reply_to,
)


def test_subscribe_message_shape() -> None:
    message = msg_subscribe("temp")

    assert to_wire(message) == {"method": "subscribe", "params": {"topic": "temp"}}
    assert is_ws_message(json.loads(encode_message(message)))


def test_publish_message_shape() -> None:
    message = msg_publish("temp", {"value": 21.5})

    assert json.loads(encode_message(message)) == {
        "method": "publish",
        "params": {"topic": "temp", "data": {"value": 21.5}},
    }


@pytest.mark.parametrize(
    ("factory", "method"),
    [
        (msg_welcome, "welcome"),
        (msg_ping, "ping"),
        (msg_pong, "pong"),
    ],
)
def test_parameterless_messages(factory, method: str) -> None:
    assert json.loads(encode_message(factory())) == {"method": method}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ({"method": "ping"}, True),
        ({"method": "anything"}, True),
        (WsMessage(method="ping"), True),
        ({}, False),
        ({"method": 1}, False),
        ("ping", False),
        (None, False),
    ],
)
def test_is_ws_message(value, expected: bool) -> None:
    assert is_ws_message(value) is expected


def test_envelope_and_method_checks_are_separate() -> None:
    message = {"method": "shout"}

    assert is_ws_message(message)
    assert not is_known_method(message)
    assert all(is_known_method({"method": method.value}) for method in WsMethod)


@pytest.mark.parametrize(
    "message",
    [msg_welcome(), msg_ping(), msg_pong(), msg_subscribe("a"), msg_publish("a", [1, None])],
)
def test_decode_encoded_message(message: WsMessage) -> None:
    assert decode_message(encode_message(message)) == message


@pytest.mark.parametrize("text", ["not json", '"ping"', "{}", '{"method": 3}'])
def test_decode_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        decode_message(text)


def test_decode_rejects_unknown_method() -> None:
    with pytest.raises(UnknownMethodError) as exc_info:
        decode_message('{"method": "shout"}')

    assert exc_info.value.method == "shout"


def test_ping_is_answered_with_pong() -> None:
    assert reply_to(msg_ping()) == msg_pong()
    assert reply_to(msg_subscribe("temp")) is None


def test_publish_model_payload_uses_wire_form() -> None:
    message = msg_publish("state", DatapointState(id="power", at=1, value_num=2.0))

    assert json.loads(encode_message(message)) == {
        "method": "publish",
        "params": {"topic": "state", "data": {"id": "power", "at": 1, "valueNum": 2.0}},
    }


def test_publish_datetime_payload_is_encodable() -> None:
    message = msg_publish("clock", {"now": datetime(2024, 1, 1)})

    decoded = decode_message(encode_message(message))

    assert decoded.params == {"topic": "clock", "data": {"now": "2024-01-01T00:00:00"}}


def test_decode_ignores_extra_envelope_keys() -> None:
    assert decode_message('{"method": "ping", "id": 7}') == msg_ping()


def test_decode_rejects_non_object_params(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="castle.schemas.messages"):
        with pytest.raises(ValueError):
            decode_message('{"method": "ping", "params": []}')

    assert "Malformed websocket envelope" in caplog.text
