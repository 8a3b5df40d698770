"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# (rows, cols). The game is always played on a 5x5 grid.
BOARD_DIMENSIONS = (5, 5)

Vector = tuple[int, int]


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def shifted(self, vector: Vector, steps: int = 1) -> Square:
        """The square reached after walking `steps` times along `vector`. Might end up off the board."""
        d_row, d_col = vector
        return Square(self.row + steps * d_row, self.col + steps * d_col)


def all_squares() -> list[Square]:
    """Row-major order: (0,0), (0,1), ... (4,4)"""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
