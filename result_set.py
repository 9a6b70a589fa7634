from typing import TYPE_CHECKING, Generic, List, Tuple, TypeVar
import math

if TYPE_CHECKING:
    from kd_tree import Point

T = TypeVar('T')


class CursorExhausted(IndexError):
    pass


class ResultSet(Generic[T]):
    '''
    Query results sorted by ascending squared distance, read once through a forward cursor.
    Entries are (point, squared distance) pairs.
    '''
    def __init__(self, entries: List[Tuple['Point[T]', float]]):
        self.entries = entries
        self.cursor = 0

    def __len__(self):
        return len(self.entries)

    def is_exhausted(self) -> bool:
        return self.cursor >= len(self.entries)

    def current(self) -> Tuple['Point[T]', float]:
        if self.is_exhausted():
            raise CursorExhausted("result set has no more entries")
        return self.entries[self.cursor]

    def current_distance(self) -> float:
        return math.sqrt(self.current()[1])

    def advance(self):
        if not self.is_exhausted():
            self.cursor += 1

    def __iter__(self):
        while not self.is_exhausted():
            entry = self.current()
            self.advance()
            yield entry
