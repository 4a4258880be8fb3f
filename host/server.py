from __future__ import annotations

import asyncio
import json
import logging
from http import HTTPStatus
from typing import Any, Dict, List, Optional

import websockets
from websockets.asyncio.server import ServerConnection
from websockets.http11 import Request, Response

from calculator.cards import Card, cards_to_labels, parse_cards
from calculator.equity import InvalidInput, compute_equity
from calculator.evaluator import evaluate_hand
from calculator.models import EquityConfig

LOGGER = logging.getLogger("equity_host")

# EquityServer answers JSON requests over WebSocket.
# Card crunching stays in calculator; this module only parses and replies.


class RequestError(Exception):
    def __init__(self, code: str, msg: str) -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg


def _card_list(payload: Dict[str, Any], key: str, *, required: bool = True) -> List[Card]:
    raw = payload.get(key)
    if raw is None and not required:
        return []
    if not isinstance(raw, list) or not all(isinstance(label, str) for label in raw):
        raise RequestError("BAD_SCHEMA", f"{key} must be a list of card labels")
    try:
        return parse_cards(raw)
    except ValueError as exc:
        raise RequestError("BAD_CARD", str(exc)) from exc


class EquityServer:
    def __init__(self, config: Optional[EquityConfig] = None) -> None:
        self.config = config or EquityConfig()
        self.requests_served = 0

    async def start(self, host: str = "0.0.0.0", port: int = 8765) -> None:
        async with websockets.serve(self._handle_connection, host, port, process_request=_process_request):
            LOGGER.info("Equity host listening on %s:%s", host, port)
            await asyncio.Future()

    async def _handle_connection(self, websocket: ServerConnection) -> None:
        try:
            async for raw in websocket:
                await self._handle_message(websocket, raw)
        except websockets.ConnectionClosed:
            LOGGER.debug("Client disconnected")

    async def _handle_message(self, websocket: Any, raw: str | bytes) -> None:
        try:
            message = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            await self._send_error(websocket, "BAD_JSON", "Message is not valid JSON")
            return
        if not isinstance(message, dict):
            await self._send_error(websocket, "BAD_SCHEMA", "Message must be an object")
            return

        msg_type = message.get("type")
        try:
            if msg_type == "evaluate":
                reply = self._evaluate(message)
            elif msg_type == "equity":
                reply = await self._equity(message)
            else:
                raise RequestError("UNKNOWN_TYPE", f"Unsupported message type: {msg_type}")
        except RequestError as exc:
            await self._send_error(websocket, exc.code, exc.msg)
            return
        except InvalidInput as exc:
            await self._send_error(websocket, "INVALID_INPUT", str(exc))
            return
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Request %s crashed: %s", msg_type, exc)
            await self._send_error(websocket, "INTERNAL", "Request failed")
            return

        self.requests_served += 1
        await websocket.send(json.dumps(reply))

    def _evaluate(self, message: Dict[str, Any]) -> Dict[str, Any]:
        cards = _card_list(message, "cards")
        if len(cards) != 7:
            raise RequestError("BAD_SCHEMA", "cards must hold exactly 7 labels")
        if len(set(cards)) != 7:
            raise RequestError("INVALID_INPUT", "cards must be distinct")
        evaluation = evaluate_hand(cards)
        return {
            "type": "evaluation",
            "kind": evaluation.kind.name,
            "values": list(evaluation.values),
        }

    async def _equity(self, message: Dict[str, Any]) -> Dict[str, Any]:
        raw_hands = message.get("hands")
        if not isinstance(raw_hands, list):
            raise RequestError("BAD_SCHEMA", "hands must be a list of two-card lists")
        hands = [_card_list({"hand": hand}, "hand") for hand in raw_hands]
        dead = _card_list(message, "dead", required=False)

        LOGGER.info("Equity request for %s", [cards_to_labels(hand) for hand in hands])
        # Enumeration is CPU bound; keep the loop free for other clients.
        results = await asyncio.to_thread(compute_equity, hands, dead, self.config)
        return {
            "type": "equity_result",
            "count": results[0].count,
            "results": [
                {"hand": cards_to_labels(hand), **result.to_dict()}
                for hand, result in zip(hands, results)
            ],
        }

    async def _send_error(self, websocket: Any, code: str, msg: str) -> None:
        LOGGER.warning("Rejected request: %s (%s)", code, msg)
        await websocket.send(json.dumps({"type": "error", "code": code, "msg": msg}))


def _process_request(connection: ServerConnection, request: Request) -> Optional[Response]:
    """Answer plain HTTP health checks; let WebSocket upgrades through."""
    if request.headers.get("Upgrade", "").lower() == "websocket":
        return None
    if request.path in {"/", "/health", "/healthz"}:
        return connection.respond(HTTPStatus.OK, "ok\n")
    return connection.respond(HTTPStatus.NOT_FOUND, "not found\n")
