"""Contact-level resource management and the basic volume managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Optional

from .bundle import Bundle
from .contact import ContactInfo
from .parsing import Lexer, read_value


@dataclass(frozen=True)
class ContactManagerTxData:
    """Timing of a (possibly simulated) transmission over a contact."""

    tx_start: float
    tx_end: float
    delay: float
    expiration: float
    arrival: float


class ContactManager(ABC):
    """Manages a contact's resources and schedules transmissions over it."""

    @abstractmethod
    def dry_run_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        """Simulate sending ``bundle`` from ``at_time``; ``None`` if impossible."""

    @abstractmethod
    def schedule_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        """Book the transmission of ``bundle``; call after a successful dry run."""

    @abstractmethod
    def try_init(self, contact_data: ContactInfo) -> bool:
        """Finish initialisation for ``contact_data``; ``False`` if inconsistent."""


class BasicVolumeManager(ContactManager):
    """A manager tracking a single booked volume with a fixed rate and delay.

    Two class flags select the behaviour:

    * ``add_delay``: the booked volume delays the earliest transmission start;
    * ``auto_update``: scheduling a bundle books its size automatically.
    """

    add_delay: ClassVar[bool] = False
    auto_update: ClassVar[bool] = True

    def __init__(self, rate: float, delay: float) -> None:
        self.rate = rate
        self.delay = delay
        self.queue_size = 0.0
        self.original_volume = 0.0

    def dry_run_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        if bundle.size > self.original_volume - self.queue_size:
            return None
        tx_start = max(contact_data.start, at_time)
        if self.add_delay:
            tx_start += self.queue_size / self.rate
        tx_end = tx_start + bundle.size / self.rate
        if tx_end > contact_data.end:
            return None
        return ContactManagerTxData(
            tx_start=tx_start,
            tx_end=tx_end,
            delay=self.delay,
            expiration=contact_data.end,
            arrival=self.delay + tx_end,
        )

    def schedule_tx(
        self, contact_data: ContactInfo, at_time: float, bundle: Bundle
    ) -> Optional[ContactManagerTxData]:
        data = self.dry_run_tx(contact_data, at_time, bundle)
        if data is not None and self.auto_update:
            self.queue_size += bundle.size
        return data

    def try_init(self, contact_data: ContactInfo) -> bool:
        self.original_volume = (contact_data.end - contact_data.start) * self.rate
        return True

    @classmethod
    def parse(cls, lexer: Lexer) -> BasicVolumeManager:
        """Read a data rate followed by a delay."""
        rate = read_value(lexer, float)
        delay = read_value(lexer, float)
        return cls(rate, delay)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rate={self.rate!r}, delay={self.delay!r}, "
            f"queue_size={self.queue_size!r}, original_volume={self.original_volume!r})"
        )


class ETOManager(BasicVolumeManager):
    """Queue delay is considered; the queue is updated by external means."""

    add_delay = True
    auto_update = False

    def enqueue(self, bundle: Bundle) -> None:
        """Add ``bundle`` to the queue; raises if the contact volume would overflow."""
        new_size = self.queue_size + bundle.size
        if new_size > self.original_volume:
            raise ValueError("Queue will overflow the contact's volume")
        self.queue_size = new_size

    def dequeue(self, bundle: Bundle) -> None:
        """Remove ``bundle`` from the queue; raises if it is larger than the queue."""
        if self.queue_size < bundle.size:
            raise ValueError(
                "Attempting to dequeue a bundle larger than the current queue size"
            )
        self.queue_size -= bundle.size


class EVLManager(BasicVolumeManager):
    """Queue delay is ignored; scheduling reduces the available volume."""

    add_delay = False
    auto_update = True


class QDManager(BasicVolumeManager):
    """Queue delay is considered and scheduling books volume automatically."""

    add_delay = True
    auto_update = True