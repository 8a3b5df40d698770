"""Inbound (client -> server) and outbound (server -> client) message models"""

from typing import Annotated, Any, Literal, Optional, Self, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import Player

CellLabel = str
PlayerName = str


class WireModel(BaseModel):
    """Clients speak camelCase (setupPositions, gameState, currentPlayer). Python side keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


# --- REQUEST MODELS ---
class SetupPosition(WireModel):
    name: str


class SetupData(WireModel):
    setup_positions: list[SetupPosition] = Field(default_factory=list)

    @field_validator("setup_positions", mode="before")
    @classmethod
    def accept_bare_names(cls, value: Any) -> Any:
        """Older clients send the names as plain strings: ["P1", "H1"] instead of [{"name": "P1"}, ...]"""
        if not isinstance(value, list):
            return value
        return [{"name": item} if isinstance(item, str) else item for item in value]

    @property
    def names(self) -> list[str]:
        return [position.name for position in self.setup_positions]


class SetupRequest(WireModel):
    type: Literal["setup"]
    data: SetupData


class MoveData(WireModel):
    character: str
    # NOTE: not a MoveCode on purpose. Unknown codes are a rule violation ("Invalid move."), not a malformed message.
    move: str


class MoveRequest(WireModel):
    type: Literal["move"]
    data: MoveData


class ResetRequest(WireModel):
    type: Literal["reset"]


InboundMessage = Annotated[
    Union[SetupRequest, MoveRequest, ResetRequest], Field(discriminator="type")
]
INBOUND_ADAPTER: TypeAdapter[InboundMessage] = TypeAdapter(InboundMessage)


def parse_inbound(raw: str | bytes) -> SetupRequest | MoveRequest | ResetRequest:
    """Decode a raw text frame. Anything that is not one of the known commands is an InvalidRequestError."""
    try:
        return INBOUND_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise InvalidRequestError(
            f"Cannot interpret message: {exc.error_count()} validation error(s). {exc.errors()[0]['msg']}"
        ) from exc


# --- RESPONSE MODELS ---
class PieceResponse(WireModel):
    name: str
    row: int
    col: int


class PlayerStateResponse(WireModel):
    pieces: list[PieceResponse]


class GameStateResponse(WireModel):
    board: list[list[Optional[CellLabel]]]
    players: dict[PlayerName, PlayerStateResponse]
    current_player: PlayerName
    phase: str

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        return cls(
            board=model.board,
            players={
                player: PlayerStateResponse(
                    pieces=[
                        PieceResponse(name=piece.name, row=piece.row, col=piece.col)
                        for piece in pieces
                    ]
                )
                for player, pieces in model.players.items()
            },
            current_player=model.current_player,
            phase=model.phase,
        )


class InitMessage(WireModel):
    type: Literal["init"] = "init"
    game_state: GameStateResponse


class UpdateMessage(WireModel):
    type: Literal["update"] = "update"
    game_state: GameStateResponse


class MoveHistoryMessage(WireModel):
    type: Literal["moveHistory"] = "moveHistory"
    data: list[str]


class ErrorMessage(WireModel):
    type: Literal["error"] = "error"
    message: str


class EndMessage(WireModel):
    type: Literal["end"] = "end"
    winner: Player


OutboundMessage = Union[
    InitMessage, UpdateMessage, MoveHistoryMessage, ErrorMessage, EndMessage
]
