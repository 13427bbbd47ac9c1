"""Request/response boundary to the game engine.

Every operation returns the full move history (0-based ``row * 15 + column``
indices). The front end never patches state; it replaces it with the snapshot.
"""

import logging
import random
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from gomoku.core.coords import BOARD_CAPACITY, BOARD_SIZE
from gomoku.core.errors import EngineError

logger = logging.getLogger(__name__)

MovePicker = Callable[[Sequence[int]], int]


class EngineGateway(ABC):
    @abstractmethod
    def init_game(self) -> List[int]: ...

    @abstractmethod
    def click(self, x: int, y: int) -> List[int]: ...

    @abstractmethod
    def undo(self) -> List[int]: ...

    @abstractmethod
    def step(self) -> List[int]: ...

    @abstractmethod
    def restart(self) -> List[int]: ...


def random_picker(rng: Optional[random.Random] = None) -> MovePicker:
    """Move picker choosing a uniformly random free cell."""
    rng = rng or random.Random()

    def pick(moves: Sequence[int]) -> int:
        taken = set(moves)
        return rng.choice([i for i in range(BOARD_CAPACITY) if i not in taken])

    return pick


class LocalSession(EngineGateway):
    """In-process engine session holding the authoritative move list.

    Placement only checks occupancy; win detection and move selection live in
    whatever ``move_picker`` the session is given.
    """

    def __init__(self, move_picker: Optional[MovePicker] = None):
        self.move_picker = move_picker or random_picker()
        self._moves: List[int] = []
        self._lock = threading.Lock()

    def snapshot(self) -> List[int]:
        """Current history without changing it."""
        with self._lock:
            return list(self._moves)

    def init_game(self) -> List[int]:
        with self._lock:
            self._moves.clear()
            logger.info("New game session")
            return list(self._moves)

    def click(self, x: int, y: int) -> List[int]:
        if not (0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE):
            raise EngineError(f"coordinate out of bounds: ({x}, {y})")
        idx = y * BOARD_SIZE + x
        with self._lock:
            if idx in self._moves:
                logger.debug("Cell (%d, %d) already taken", x, y)
            else:
                self._moves.append(idx)
            return list(self._moves)

    def undo(self) -> List[int]:
        with self._lock:
            if self._moves:
                self._moves.pop()
            return list(self._moves)

    def step(self) -> List[int]:
        with self._lock:
            if len(self._moves) >= BOARD_CAPACITY:
                raise EngineError("board is full")
            idx = self.move_picker(tuple(self._moves))
            if not 0 <= idx < BOARD_CAPACITY or idx in self._moves:
                raise EngineError(f"move picker returned an unplayable cell: {idx}")
            self._moves.append(idx)
            logger.debug("Engine plays %d", idx)
            return list(self._moves)

    def restart(self) -> List[int]:
        with self._lock:
            self._moves.clear()
            logger.info("Game restarted")
            return list(self._moves)


_OPERATIONS = ("init_game", "click", "undo", "step", "restart")


class EngineWorker:
    """Runs gateway calls off the UI loop, one at a time.

    A single engine thread keeps execution order equal to submission order,
    so the engine state always reflects the last request submitted.
    """

    def __init__(self, gateway: EngineGateway):
        self.gateway = gateway
        self.pool: Optional[ThreadPoolExecutor] = None

    def start(self):
        self.pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="engine")

    def submit(self, op: str, *args) -> Future:
        if op not in _OPERATIONS:
            raise ValueError(f"unknown engine operation: {op}")
        if self.pool is None:
            raise EngineError("engine worker is not running")
        return self.pool.submit(getattr(self.gateway, op), *args)

    def shutdown(self):
        if self.pool:
            self.pool.shutdown(wait=False, cancel_futures=True)
            self.pool = None
