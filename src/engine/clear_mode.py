"""
Clear mode: the board starts partly filled and the goal is to clear it.

The initializer scatters weighted-random letters over a fraction of the
grid. Progress is measured by how many of those initial tiles are still on
the board, so it stays correct after gravity moves them.
"""

import logging
import math
import random
from typing import List, Optional

from ..board.models import Cell
from .letters import weighted_random_letter
from .models import GameConfig, GameState, InitialGrid


log = logging.getLogger("letterdrop.clear_mode")


def random_indices(total: int, count: int, rng) -> List[int]:
    """Pick `count` distinct indices from range(total) with a partial Fisher-Yates shuffle."""
    indices = list(range(total))
    count = max(0, min(count, total))
    for i in range(total - 1, total - count - 1, -1):
        j = rng.randrange(i + 1)
        indices[i], indices[j] = indices[j], indices[i]
    return indices[total - count:]


class ClearModeInitializer:
    """Populates the starting grid for clear mode."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)

    @property
    def cells_to_fill(self) -> int:
        return math.floor(self.config.grid_size * self.config.clear_mode_fill_percentage)

    def populate_initial_grid(self) -> InitialGrid:
        grid: List[Optional[Cell]] = [None] * self.config.grid_size
        targets = random_indices(self.config.grid_size, self.cells_to_fill, self.rng)

        for i, index in enumerate(targets):
            grid[index] = Cell(
                char=weighted_random_letter(self.rng),
                id=f"initial-{i}",
                is_initial=True,
            )

        log.info("Clear mode initialized: %d cells populated", len(targets))
        return InitialGrid(grid=tuple(grid), target_indices=tuple(targets))


def remaining_initial_cells(state: GameState) -> int:
    return sum(1 for cell in state.grid if cell is not None and cell.is_initial)


def clear_mode_progress(state: GameState) -> float:
    """Percentage (0-100) of initial tiles cleared so far."""
    target = len(state.initial_blocks)
    if target == 0:
        return 100.0
    cleared = target - remaining_initial_cells(state)
    return 100.0 * cleared / target


def is_clear_mode_complete(state: GameState) -> bool:
    """True once a clear-mode game has no initial tile left on the board."""
    return state.game_mode == "clear" and remaining_initial_cells(state) == 0
