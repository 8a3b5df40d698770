"""
Custom exceptions shared by all layers.

Every rejection inside the game is recoverable: the service catches `GameError` and replies to the
client that sent the command. The `client_message` is what ends up on the wire.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a command."""

    client_message: str = "Invalid request."

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.client_message
        super().__init__(self.detail)


class InvalidRequestError(GameError):
    """Inbound message could not be decoded (unknown type, missing fields, not JSON...)"""

    client_message = "Invalid message."


class GameStateError(GameError):
    """Command does not fit the current phase of the match. On the wire it reads like an unknown character."""

    client_message = "Invalid character."


class SetupConflictError(GameError):
    """The acting player already placed their pieces."""

    client_message = "Setup already completed."


class InvalidSetupError(GameError):
    """Placements cannot be represented on the home row."""

    client_message = "Invalid setup."


class UnknownPieceError(GameError):
    """Referenced character is not in the acting player's roster."""

    client_message = "Invalid character."


class IllegalMoveError(GameError):
    client_message = "Invalid move."


class OutOfBoundsError(IllegalMoveError):
    """Square outside of the 5x5 grid."""


class BoardInvariantError(IllegalMoveError):
    """
    Grid and rosters disagree.
    ---
    Should never happen if the board is only mutated through its own methods. Still reported to the client as an invalid move.
    """
