from __future__ import annotations

import logging
import random
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Tuple

from .shapes import TetrominoType


logger = logging.getLogger(__name__)


class BagRandomizer:
    """Endless 7-bag sequence of piece kinds.

    Every kind is dealt once per shuffled bag, so each aligned window of
    seven draws is a permutation of all kinds. The sequence is pull-based:
    iterate it or call `next_kind()`.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 kinds: Iterable[TetrominoType] = tuple(TetrominoType)) -> None:
        self.rng = rng or random.Random()
        self.kinds: Tuple[TetrominoType, ...] = tuple(kinds)
        self.bags_drawn = 0
        self._bag: List[TetrominoType] = []
        self._index = 0

    def __iter__(self) -> Iterator[TetrominoType]:
        return self

    def __next__(self) -> TetrominoType:
        if self._index >= len(self._bag):
            self._refill()
        kind = self._bag[self._index]
        self._index += 1
        return kind

    def next_kind(self) -> TetrominoType:
        return next(self)

    def _refill(self) -> None:
        bag = list(self.kinds)
        self.rng.shuffle(bag)
        self._bag = bag
        self._index = 0
        self.bags_drawn += 1
        logger.debug("Shuffled bag #%d: %s", self.bags_drawn, "".join(k.name for k in bag))


class PieceQueue:
    """Preview queue kept at `min_length` kinds after every pop."""

    def __init__(self, source: Iterator[TetrominoType], min_length: int = 5) -> None:
        self._source = source
        self.min_length = int(min_length)
        self._queue: Deque[TetrominoType] = deque()
        self._fill()

    def _fill(self) -> None:
        while len(self._queue) < self.min_length:
            self._queue.append(next(self._source))

    def pop(self) -> TetrominoType:
        kind = self._queue.popleft() if self._queue else next(self._source)
        self._fill()
        return kind

    def peek(self, count: Optional[int] = None) -> Tuple[TetrominoType, ...]:
        items = tuple(self._queue)
        return items if count is None else items[:count]

    def __len__(self) -> int:
        return len(self._queue)
