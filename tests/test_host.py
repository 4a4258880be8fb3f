import asyncio
import json
from http import HTTPStatus

import pytest
from websockets.datastructures import Headers
from websockets.http11 import Request

from calculator.cards import cards_to_labels
from calculator.models import EquityConfig
from host.server import EquityServer, _process_request

from .helpers import cards, dead_except


# Fake socket so the message handlers run without opening real connections.
class DummyWebSocket:
    def __init__(self) -> None:
        self.sent: list[str] = []

    async def send(self, message: str) -> None:
        self.sent.append(message)


def exchange(server: EquityServer, message) -> dict:
    websocket = DummyWebSocket()
    raw = message if isinstance(message, (str, bytes)) else json.dumps(message)
    asyncio.run(server._handle_message(websocket, raw))
    assert len(websocket.sent) == 1
    return json.loads(websocket.sent[0])


def test_evaluate_request_returns_kind_and_values():
    server = EquityServer()
    reply = exchange(server, {"type": "evaluate", "cards": ["Ac", "Kc", "Qc", "Jc", "Tc", "8h", "5h"]})

    assert reply == {"type": "evaluation", "kind": "STRAIGHT_FLUSH", "values": [14, 0, 0]}
    assert server.requests_served == 1


def test_equity_request_returns_results_per_hand():
    server = EquityServer(EquityConfig(workers=1))
    hero, villain = cards("Ah", "Ad"), cards("7c", "2d")
    dead = dead_except(cards("Ks", "Qs", "9c", "5h", "3d"), hero, villain)

    reply = exchange(
        server,
        {"type": "equity", "hands": [["Ah", "Ad"], ["7c", "2d"]], "dead": cards_to_labels(dead)},
    )

    assert reply["type"] == "equity_result"
    assert reply["count"] == 1
    first, second = reply["results"]
    assert first["hand"] == ["Ah", "Ad"]
    assert first["win_count"] == 1 and first["win_pct"] == 100.0
    assert second["loss_count"] == 1 and second["loss_pct"] == 100.0


def test_bad_json_is_rejected():
    reply = exchange(EquityServer(), "{not json")
    assert reply["type"] == "error"
    assert reply["code"] == "BAD_JSON"


def test_unknown_type_is_rejected():
    reply = exchange(EquityServer(), {"type": "hello"})
    assert reply["code"] == "UNKNOWN_TYPE"


def test_bad_card_label_is_rejected():
    reply = exchange(EquityServer(), {"type": "evaluate", "cards": ["Zz", "Kc", "Qc", "Jc", "Tc", "8h", "5h"]})
    assert reply["code"] == "BAD_CARD"


def test_wrong_card_count_is_rejected():
    reply = exchange(EquityServer(), {"type": "evaluate", "cards": ["Ac", "Kc"]})
    assert reply["code"] == "BAD_SCHEMA"


def test_duplicate_cards_in_evaluate_are_rejected():
    reply = exchange(EquityServer(), {"type": "evaluate", "cards": ["Ac", "Ac", "Qc", "Jc", "Tc", "8h", "5h"]})
    assert reply["code"] == "INVALID_INPUT"


def test_equity_with_duplicate_cards_reports_invalid_input():
    server = EquityServer()
    reply = exchange(server, {"type": "equity", "hands": [["Ah", "Kd"], ["Ah", "Qc"]]})

    assert reply["code"] == "INVALID_INPUT"
    assert "Ah" in reply["msg"]
    assert server.requests_served == 0


def test_equity_requires_list_of_hands():
    reply = exchange(EquityServer(), {"type": "equity", "hands": "AhKd"})
    assert reply["code"] == "BAD_SCHEMA"


def test_undecodable_binary_frame_is_rejected():
    reply = exchange(EquityServer(), b"\xff\xfe{")
    assert reply["type"] == "error"
    assert reply["code"] == "BAD_JSON"


def test_unexpected_failure_replies_internal_error(monkeypatch):
    server = EquityServer()

    def explode(message):
        raise RuntimeError("boom")

    monkeypatch.setattr(server, "_evaluate", explode)
    reply = exchange(server, {"type": "evaluate", "cards": []})

    assert reply["code"] == "INTERNAL"
    assert server.requests_served == 0


def test_equity_rejects_dead_cards_that_are_not_a_list():
    reply = exchange(EquityServer(), {"type": "equity", "hands": [["Ah", "Kd"], ["2c", "2d"]], "dead": "As"})
    assert reply["code"] == "BAD_SCHEMA"
    assert "dead" in reply["msg"]


# Stand-in for the server connection; respond() just echoes what it was given.
class DummyConnection:
    def respond(self, status, text):
        return status, text


@pytest.mark.parametrize("path", ["/", "/health", "/healthz"])
def test_health_paths_answer_ok(path):
    response = _process_request(DummyConnection(), Request(path, Headers()))
    assert response == (HTTPStatus.OK, "ok\n")


def test_unknown_http_path_is_not_found():
    response = _process_request(DummyConnection(), Request("/metrics", Headers()))
    assert response == (HTTPStatus.NOT_FOUND, "not found\n")


def test_websocket_upgrade_passes_through():
    headers = Headers([("Upgrade", "websocket"), ("Connection", "Upgrade")])
    assert _process_request(DummyConnection(), Request("/", headers)) is None
