"""
GameSession ties the engine together.

It owns the current state, runs the word matcher after every drop and
gravity pass, registers matches with the grace period coordinator and,
when a grace period expires, drives the resolution sequence:

    SET_MATCHED_INDICES -> (shake delay) REMOVE_WORDS -> (gravity delay) APPLY_GRAVITY

All pending words resolve together on the first expiry, since gravity
invalidates the positions of whatever is left.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..board.dictionary import Dictionary
from ..board.grid import render_grid
from ..board.matcher import find_words
from ..board.models import LetterTile, WordMatch
from .actions import (
    ApplyGravity,
    DropLetter,
    GameOver,
    RemoveWords,
    Reset,
    SetMatchedIndices,
    SetPending,
    StartGame,
    WordRemoval,
)
from .clear_mode import is_clear_mode_complete
from .grace import AnimationNotifier, GracePeriodCoordinator
from .models import CLASSIC, GAME_OVER, PLAYING, GameConfig, GameMode, GameState, initial_state
from .reducer import GameRules, transition
from .scheduler import Scheduler, TimerHandle


log = logging.getLogger("letterdrop.session")


class GameSession:
    """
    Stateful driver around the pure transition function.

    Attributes:
        state: Current immutable game state
        dictionary: Lookup used by the matcher
        coordinator: Grace period bookkeeping for pending words
    """

    def __init__(
        self,
        dictionary: Optional[Dictionary],
        scheduler: Scheduler,
        config: Optional[GameConfig] = None,
        notifier: Optional[AnimationNotifier] = None,
        rules: Optional[GameRules] = None,
    ):
        if rules is None:
            rules = GameRules(config=config or GameConfig())
        self.rules = rules
        self.config = rules.config
        self.dictionary = dictionary
        self.scheduler = scheduler
        self.coordinator = GracePeriodCoordinator(
            scheduler,
            notifier=notifier,
            grace_period_ms=self.config.grace_period_ms,
        )
        self.state: GameState = initial_state(self.config)
        self._matches: Dict[str, WordMatch] = {}
        self._resolution: Optional[TimerHandle] = None
        self.listeners: List[Callable[[GameState], None]] = []

    # -- dispatch ---------------------------------------------------------

    def dispatch(self, action) -> GameState:
        """Apply an action and notify listeners if the state changed."""
        previous = self.state
        self.state = transition(self.state, action, self.rules)
        if self.state is not previous:
            for listener in self.listeners:
                listener(self.state)
        return self.state

    # -- lifecycle --------------------------------------------------------

    def start(self, mode: GameMode = CLASSIC) -> GameState:
        self._cancel_all()
        self.dispatch(StartGame(mode=mode))
        self.detect_words()
        return self.state

    def drop(self, column: int) -> bool:
        """
        Drop the next letter into a column.

        Returns:
            True if a letter was placed
        """
        previous = self.state
        self.dispatch(DropLetter(column=column))
        if self.state is previous:
            return False
        self.detect_words()
        return True

    def reset(self) -> GameState:
        self._cancel_all()
        return self.dispatch(Reset())

    def snapshot(self) -> GameState:
        return self.state

    def restore(self, snapshot: GameState) -> GameState:
        """Rewind to a previously taken snapshot, dropping all pending work."""
        self._cancel_all()
        self.state = snapshot
        for listener in self.listeners:
            listener(self.state)
        self.detect_words()
        return self.state

    def preview(self) -> List[LetterTile]:
        return list(self.state.next_queue[:self.config.preview_count])

    @property
    def is_over(self) -> bool:
        return self.state.status == GAME_OVER

    @property
    def is_resolving(self) -> bool:
        return self._resolution is not None

    # -- word detection ---------------------------------------------------

    def detect_words(self) -> List[WordMatch]:
        """
        Scan the grid and register words not already pending.

        Drops only fill empty cells and every resolution empties the
        pending set, so a pending word cannot disappear between scans.

        Returns:
            Matches newly registered by this scan
        """
        if self.state.status not in (PLAYING, GAME_OVER) or self.dictionary is None:
            return []
        if self._resolution is not None:
            return []

        found = find_words(self.state.grid, self.dictionary, self.config.columns)
        keys = {self.coordinator.generate_key(match): match for match in found}

        added: List[WordMatch] = []
        for key, match in keys.items():
            if self.coordinator.has_pending(key):
                continue

            for other in self.coordinator.get_intersecting_keys(match.positions):
                self.coordinator.reset_grace_period(other, self._on_expired)
                related = self._matches[other]
                self.dispatch(SetPending(indices=related.positions, direction=related.direction))

            self.coordinator.add_pending_word(match, self._on_expired)
            self._matches[key] = match
            self.dispatch(SetPending(indices=match.positions, direction=match.direction))
            added.append(match)

        if added:
            log.info("Pending words: %s", [m.word for m in added])
            log.debug("Grid:\n%s", render_grid(self.state.grid, self.config.columns))
        return added

    # -- resolution -------------------------------------------------------

    def _on_expired(self, key: str) -> None:
        # Resolve every pending word at once
        matches = list(self._matches.values())
        self._matches.clear()
        self.coordinator.clear_all()
        if not matches:
            return

        indices = sorted({index for match in matches for index in match.positions})
        self.dispatch(SetMatchedIndices(indices=indices))

        removals = tuple(WordRemoval(word=m.word, indices=m.positions) for m in matches)
        self._resolution = self.scheduler.schedule(
            self.config.shake_duration_ms, lambda: self._remove(removals)
        )

    def _remove(self, removals) -> None:
        self.dispatch(RemoveWords(words_to_remove=removals))
        self._resolution = self.scheduler.schedule(self.config.gravity_delay_ms, self._settle)

    def _settle(self) -> None:
        self._resolution = None
        self.dispatch(ApplyGravity())

        if is_clear_mode_complete(self.state):
            log.info("Board cleared with score %d", self.state.score)
            self.dispatch(GameOver())
            return

        self.detect_words()
        if not self._matches and not self.state.next_queue:
            self.dispatch(GameOver())

    def _cancel_all(self) -> None:
        self.coordinator.clear_all()
        self._matches.clear()
        if self._resolution is not None:
            self._resolution.cancel()
            self._resolution = None
