"""Position maps: translate positions across document edits."""

from collections.abc import Iterable
from dataclasses import dataclass

from term_highlight.protocols import SpanCallback


@dataclass(frozen=True)
class ReplacedRange:
    """One replaced span: ``old_size`` positions at ``start`` became ``new_size`` positions."""

    start: int
    old_size: int
    new_size: int


class StepMap:
    """Position map of a single edit step.

    ``ranges`` must be sorted by ``start`` and expressed in pre-step
    coordinates (post-step coordinates when ``inverted``).
    """

    def __init__(self, ranges: Iterable[ReplacedRange] = (), *, inverted: bool = False) -> None:
        self.ranges: tuple[ReplacedRange, ...] = tuple(ranges)
        self.inverted = inverted

    @classmethod
    def replace(cls, start: int, end: int, new_size: int) -> "StepMap":
        if start < 0 or end < start or new_size < 0:
            msg = f"Invalid replacement: start={start}, end={end}, new_size={new_size}"
            raise ValueError(msg)
        return cls([ReplacedRange(start=start, old_size=end - start, new_size=new_size)])

    def _sizes(self, rng: ReplacedRange) -> tuple[int, int]:
        if self.inverted:
            return rng.new_size, rng.old_size
        return rng.old_size, rng.new_size

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map ``pos`` through this step.

        ``assoc`` picks the side a position sticks to when content is inserted
        exactly at it (negative: before the insertion, positive: after).
        Positions inside a replaced span move to its start or end.
        """
        diff = 0
        for rng in self.ranges:
            start = rng.start - (diff if self.inverted else 0)
            if start > pos:
                break
            old_size, new_size = self._sizes(rng)
            end = start + old_size
            if pos <= end:
                if not old_size:
                    side = assoc
                elif pos == start:
                    side = -1
                elif pos == end:
                    side = 1
                else:
                    side = assoc
                return start + diff + (0 if side < 0 else new_size)
            diff += new_size - old_size
        return pos + diff

    def for_each(self, callback: SpanCallback) -> None:
        diff = 0
        for rng in self.ranges:
            start = rng.start - (diff if self.inverted else 0)
            old_size, new_size = self._sizes(rng)
            new_start = start + diff
            callback(start, start + old_size, new_start, new_start + new_size)
            diff += new_size - old_size

    def invert(self) -> "StepMap":
        return StepMap(self.ranges, inverted=not self.inverted)

    def __bool__(self) -> bool:
        return bool(self.ranges)

    def __repr__(self) -> str:
        spans = ", ".join(f"{r.start}+{r.old_size}->{r.new_size}" for r in self.ranges)
        return f"StepMap([{spans}]{', inverted' if self.inverted else ''})"


class Mapping:
    """A sequence of step maps applied in order."""

    def __init__(self, maps: Iterable[StepMap] = ()) -> None:
        self.maps: tuple[StepMap, ...] = tuple(maps)

    def appended(self, step_map: StepMap) -> "Mapping":
        return Mapping((*self.maps, step_map))

    def map(self, pos: int, assoc: int = 1) -> int:
        for step_map in self.maps:
            pos = step_map.map(pos, assoc)
        return pos

    def for_each(self, callback: SpanCallback) -> None:
        for step_map in self.maps:
            step_map.for_each(callback)

    def invert(self) -> "Mapping":
        return Mapping(step_map.invert() for step_map in reversed(self.maps))

    def __len__(self) -> int:
        return len(self.maps)
