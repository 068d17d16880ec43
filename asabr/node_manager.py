"""Node-level resource management: processing, transmission and reception."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .bundle import Bundle
from .parsing import Lexer


class NodeManager(ABC):
    """Decides how a node processes, sends and receives bundles over time.

    Scheduling operations default to the outcome of the matching dry run.
    """

    @abstractmethod
    def dry_run_process(self, at_time: float, bundle: Bundle) -> float:
        """Simulate processing; may alter ``bundle`` and returns the completion time."""

    @abstractmethod
    def dry_run_tx(self, waiting_since: float, start: float, end: float, bundle: Bundle) -> bool:
        """Tell whether ``bundle`` could be sent within ``[start, end]``."""

    @abstractmethod
    def dry_run_rx(self, start: float, end: float, bundle: Bundle) -> bool:
        """Tell whether ``bundle`` could be received within ``[start, end]``."""

    def schedule_process(self, at_time: float, bundle: Bundle) -> float:
        """Schedule processing; may alter ``bundle`` and returns the completion time."""
        return self.dry_run_process(at_time, bundle)

    def schedule_tx(self, waiting_since: float, start: float, end: float, bundle: Bundle) -> bool:
        """Schedule sending ``bundle`` within ``[start, end]``."""
        return self.dry_run_tx(waiting_since, start, end, bundle)

    def schedule_rx(self, start: float, end: float, bundle: Bundle) -> bool:
        """Schedule receiving ``bundle`` within ``[start, end]``."""
        return self.dry_run_rx(start, end, bundle)


class NoManagement(NodeManager):
    """A node manager with no effect: processing is instant and any window is accepted."""

    def dry_run_process(self, at_time: float, bundle: Bundle) -> float:
        # No processing delay and the bundle is left untouched.
        return float(at_time)

    def dry_run_tx(self, waiting_since: float, start: float, end: float, bundle: Bundle) -> bool:
        return start <= end

    def dry_run_rx(self, start: float, end: float, bundle: Bundle) -> bool:
        return start <= end

    @classmethod
    def parse(cls, lexer: Lexer) -> NoManagement:
        """Build the manager; it reads no tokens."""
        return cls()

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoManagement)

    def __hash__(self) -> int:
        return hash(NoManagement)

    def __repr__(self) -> str:
        return "NoManagement()"