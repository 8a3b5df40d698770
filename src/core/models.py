"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
The domain layer (lower) produces them, and the API layer (higher) converts them into the wire format.
(Decouples the domain objects from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
PlayerName = str
CellLabel = str


@dataclass
class PieceModel:
    name: str
    row: int
    col: int


@dataclass
class GameModel:
    """Transport-safe snapshot of the match used between Match, Service, and API layers."""

    board: list[list[CellLabel | None]]
    players: dict[PlayerName, list[PieceModel]]
    current_player: PlayerName
    phase: str
    move_history: list[str] = field(default_factory=list)
