"""Effective volume limit manager with per-priority volume budgets."""

from __future__ import annotations

from typing import Iterable, Optional

from .bundle import Bundle
from .contact import ContactInfo
from .contact_manager import ContactManager, ContactManagerTxData
from .parsing import Lexer, ParsingError, read_value

PRIORITY_LEVELS = 3


class PriorityEVLManager(ContactManager):
    """EVL contact manager where each priority level has its own maximum volume.

    Priority 0 is the most important level. The queue delay never offsets the
    transmission start, and scheduling books volume automatically.
    """

    def __init__(self, rate: float, delay: float, original_mav: Iterable[float]) -> None:
        mav = [float(v) for v in original_mav]
        if len(mav) != PRIORITY_LEVELS:
            raise ValueError(f"Expected {PRIORITY_LEVELS} MAV values, got {len(mav)}")
        self.rate = rate
        self.delay = delay
        self.queue_size = 0.0
        self.original_volume = 0.0
        self.mav = mav

    @classmethod
    def legacy(cls, rate: float, delay: float) -> PriorityEVLManager:
        """Build a manager with default budgets derived from the rate."""
        return cls(rate, delay, [rate * 10.0, rate * 7.0, rate * 3.0])

    def mav_for(self, priority: int) -> float:
        """Maximum available volume for ``priority``; 0 for undefined levels."""
        if 0 <= priority < len(self.mav):
            return self.mav[priority]
        return 0.0

    def _update_mav(self, volume: float, priority: int) -> None:
        # Booking at one level also consumes the budget of every less important level.
        if not 0 <= priority < len(self.mav):
            return
        for level in range(priority, len(self.mav)):
            if self.mav[level] > volume:
                self.mav[level] -= volume
            else:
                for lower in range(level, len(self.mav)):
                    self.mav[lower] = 0.0
                break

    def dry_run_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        tx_start = max(contact_data.start, at_time)
        tx_end = tx_start + bundle.size / self.rate
        if tx_end > contact_data.end:
            return None
        arrival = self.delay + tx_end
        if arrival > bundle.expiration:
            return None
        max_volume = (tx_end - tx_start) * self.rate
        if bundle.size > min(max_volume, self.mav_for(bundle.priority)):
            return None
        return ContactManagerTxData(
            tx_start=tx_start,
            tx_end=tx_end,
            delay=self.delay,
            expiration=contact_data.end,
            arrival=arrival,
        )

    def schedule_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        data = self.dry_run_tx(contact_data, at_time, bundle)
        if data is not None:
            self._update_mav(bundle.size, bundle.priority)
            self.queue_size += bundle.size
        return data

    def try_init(self, contact_data: ContactInfo) -> bool:
        return True

    @classmethod
    def parse(cls, lexer: Lexer) -> PriorityEVLManager:
        """Read a rate, a delay and one maximum volume per priority level."""
        rate = read_value(lexer, float)
        delay = read_value(lexer, float)
        mav = []
        for level in range(1, PRIORITY_LEVELS + 1):
            token = lexer.consume_next_token()
            if token is None:
                raise ParsingError(
                    f"Parsing MAV of priority {level} failed ({lexer.current_position})"
                )
            try:
                mav.append(float(token))
            except ValueError as exc:
                raise ParsingError(
                    f"Unable to parse token '{token}' ({lexer.current_position})"
                ) from exc
        return cls(rate, delay, mav)

    def __repr__(self) -> str:
        return (
            f"PriorityEVLManager(rate={self.rate!r}, delay={self.delay!r}, "
            f"queue_size={self.queue_size!r}, mav={self.mav!r})"
        )