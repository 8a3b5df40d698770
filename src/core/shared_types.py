"""
Type definitions used across layers
"""

from enum import StrEnum


class Player(StrEnum):
    A = "A"
    B = "B"

    @property
    def opponent(self) -> "Player":
        return Player.B if self == Player.A else Player.A

    @property
    def home_row(self) -> int:
        """Row where the player's pieces get placed during setup. A starts at the top, B at the bottom."""
        return 0 if self == Player.A else 4


class Phase(StrEnum):
    SETUP = "setup"
    ACTIVE = "active"
    ENDED = "ended"


class MoveCode(StrEnum):
    """Direction codes as sent by the clients. Forward/backward are relative to the moving player."""

    L = "L"
    R = "R"
    F = "F"
    B = "B"
    FL = "FL"
    FR = "FR"
    BL = "BL"
    BR = "BR"
