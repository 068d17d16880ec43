"""Segmented contacts: rate and delay that change over a contact's lifetime."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from .bundle import Bundle
from .contact import ContactInfo
from .contact_manager import ContactManager, ContactManagerTxData
from .parsing import Lexer, read_value

T = TypeVar("T")

_FLOAT_MAX = sys.float_info.max


@dataclass
class Segment(Generic[T]):
    """A time interval with an associated value such as a rate or a delay."""

    start: float
    end: float
    val: T = None  # type: ignore[assignment]


def _delay_at(tx_end: float, delay_intervals: list[Segment[float]]) -> float:
    """Delay of the first interval not ending before ``tx_end``; the largest float otherwise."""
    return next((seg.val for seg in delay_intervals if tx_end <= seg.end), _FLOAT_MAX)


@dataclass(eq=False)
class SegmentationManager(ContactManager):
    """Contact manager whose data rate and delay vary by segment.

    Free intervals track the parts of the contact not yet booked; they are
    created by :meth:`try_init` and split by :meth:`schedule_tx`.
    """

    rate_intervals: list[Segment[float]] = field(default_factory=list)
    delay_intervals: list[Segment[float]] = field(default_factory=list)
    free_intervals: list[Segment[None]] = field(default_factory=list)
    original_volume: float = 0.0

    def _tx_end(self, at_time: float, volume: float, deadline: float) -> Optional[float]:
        tx_end = _FLOAT_MAX
        for rate_seg in self.rate_intervals:
            if rate_seg.end < at_time:
                continue
            tx_end = at_time + volume / rate_seg.val
            if tx_end > rate_seg.end:
                volume -= rate_seg.val * (tx_end - at_time)
                at_time = rate_seg.end
                continue
            volume = 0.0
            break
        if volume > 0.0 or tx_end > deadline:
            return None
        return tx_end

    def _find_slot(
        self, at_time: float, bundle: Bundle
    ) -> Optional[tuple[int, float, float]]:
        for index, free_seg in enumerate(self.free_intervals):
            if free_seg.end < at_time:
                continue
            tx_start = max(free_seg.start, at_time)
            tx_end = self._tx_end(tx_start, bundle.size, free_seg.end)
            if tx_end is not None:
                return index, tx_start, tx_end
        return None

    def dry_run_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        slot = self._find_slot(at_time, bundle)
        if slot is None:
            return None
        index, tx_start, tx_end = slot
        delay = _delay_at(tx_end, self.delay_intervals)
        return ContactManagerTxData(
            tx_start=tx_start,
            tx_end=tx_end,
            delay=delay,
            expiration=self.free_intervals[index].end,
            arrival=tx_end + delay,
        )

    def schedule_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        slot = self._find_slot(at_time, bundle)
        if slot is None:
            return None
        index, tx_start, tx_end = slot
        interval = self.free_intervals[index]
        expiration = interval.end
        delay = _delay_at(tx_end, self.delay_intervals)

        if interval.start != tx_start:
            interval.end = tx_start
            self.free_intervals.insert(index + 1, Segment(tx_end, expiration))
        else:
            interval.start = tx_end

        return ContactManagerTxData(
            tx_start=tx_start,
            tx_end=tx_end,
            delay=delay,
            expiration=expiration,
            arrival=tx_end + delay,
        )

    @staticmethod
    def _covers(intervals: list[Segment[float]], start: float, end: float) -> bool:
        if not intervals:
            return False
        time = start
        for seg in intervals:
            if seg.start != time:
                return False
            time = seg.end
        return intervals[-1].end == end

    def try_init(self, contact_data: ContactInfo) -> bool:
        """Check that rate and delay segments cover the contact without gaps."""
        start, end = contact_data.start, contact_data.end
        if not self._covers(self.rate_intervals, start, end):
            return False
        if not self._covers(self.delay_intervals, start, end):
            return False
        self.original_volume = sum(
            (seg.end - seg.start) * seg.val for seg in self.rate_intervals
        )
        self.free_intervals.append(Segment(start, end))
        return True

    @classmethod
    def parse(cls, lexer: Lexer) -> SegmentationManager:
        """Read ``rate`` and ``delay`` intervals until another token appears.

        Each interval is a marker followed by start, end and value.
        """
        rates: list[Segment[float]] = []
        delays: list[Segment[float]] = []
        targets = {"rate": rates, "delay": delays}
        while True:
            marker = lexer.lookup()
            if marker not in targets:
                break
            lexer.consume_next_token()
            start = read_value(lexer, float)
            end = read_value(lexer, float)
            val = read_value(lexer, float)
            targets[marker].append(Segment(start, end, val))
        return cls(rate_intervals=rates, delay_intervals=delays)