"""
Orchestration of communication from the websocket layer to the game logic (and the reverse direction).

The service does not know about connections. Every command returns the list of messages to deliver,
each one addressed either to the client that sent the command or to everybody.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from src.api.models import (
    EndMessage,
    ErrorMessage,
    GameStateResponse,
    InitMessage,
    MoveHistoryMessage,
    MoveRequest,
    OutboundMessage,
    ResetRequest,
    SetupRequest,
    UpdateMessage,
    parse_inbound,
)
from src.core.exceptions import BoardInvariantError, GameError
from src.duel.match import Match

logger = logging.getLogger(__name__)


class Recipient(Enum):
    SENDER = auto()
    EVERYONE = auto()


@dataclass
class Outbound:
    recipient: Recipient
    message: OutboundMessage

    def to_json(self) -> str:
        return self.message.to_json()


def reply(message: OutboundMessage) -> Outbound:
    return Outbound(Recipient.SENDER, message)


def broadcast(message: OutboundMessage) -> Outbound:
    return Outbound(Recipient.EVERYONE, message)


class DuelService:
    """Session coordinator for the one and only match."""

    def __init__(self, match: Match) -> None:
        self.match = match

    # -- Websocket entry points ---
    def connect(self) -> list[Outbound]:
        """A new client connected: send them the full current state."""
        return [reply(InitMessage(game_state=self.state()))]

    def handle(self, raw: str | bytes) -> list[Outbound]:
        """
        Decode a raw frame and run the command.
        ----

        Any rejection is answered to the sender only. The match is never touched by a rejected command.
        """
        try:
            request = parse_inbound(raw)
            return self.dispatch(request)
        except BoardInvariantError as exc:
            logger.error("Board invariant violated, command rejected: %s", exc.detail)
            return [reply(ErrorMessage(message=exc.client_message))]
        except GameError as exc:
            logger.warning("Command rejected: %s", exc.detail)
            return [reply(ErrorMessage(message=exc.client_message))]

    def dispatch(self, request: SetupRequest | MoveRequest | ResetRequest) -> list[Outbound]:
        if isinstance(request, SetupRequest):
            return self.setup(request)
        if isinstance(request, MoveRequest):
            return self.move(request)
        return self.reset()

    # -- Commands ---
    def setup(self, request: SetupRequest) -> list[Outbound]:
        """Current player places their pieces. Everybody gets the new state."""
        player = self.match.setup(request.data.names)
        logger.info(
            "Player %s completed setup, %s to play", player, self.match.current_player
        )
        return [broadcast(UpdateMessage(game_state=self.state()))]

    def move(self, request: MoveRequest) -> list[Outbound]:
        """
        Current player moves a piece.
        ----

        Regular move: new state + full move history.
        Winning move: announce the winner, then start over with a fresh match.
        """
        outcome = self.match.move(request.data.character, request.data.move)
        logger.info(
            "%s (captured: %s)",
            outcome.entry,
            ", ".join(tag.to_label() for tag in outcome.captured) or "nothing",
        )

        if outcome.winner is not None:
            self.match.reset()
            return [
                broadcast(EndMessage(winner=outcome.winner)),
                broadcast(UpdateMessage(game_state=self.state())),
            ]

        return [
            broadcast(UpdateMessage(game_state=self.state())),
            broadcast(MoveHistoryMessage(data=self.match.move_log.to_strings())),
        ]

    def reset(self) -> list[Outbound]:
        """Start over, whatever the current phase."""
        self.match.reset()
        logger.info("Match reset")
        return [broadcast(UpdateMessage(game_state=self.state()))]

    def state(self) -> GameStateResponse:
        return GameStateResponse.from_model(self.match.to_model())
