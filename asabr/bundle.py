"""Routing bundles: the unit of data a route is computed for."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Bundle:
    """Routing details needed to find a path for a piece of data.

    A lower ``priority`` value means a more important bundle.
    """

    source: int
    destinations: list[int] = field(default_factory=list)
    priority: int = 0
    size: float = 0.0
    expiration: float = float("inf")

    def shadows(self, other: Bundle, check_by_size: bool, check_by_priority: bool) -> bool:
        """Tell whether routes computed for this bundle may hide routes usable by ``other``.

        ``self`` is the bundle a routing tree was built for. Paths may have been
        skipped for a larger bundle, and a more important bundle may claim
        volume that a less important one cannot.
        """
        if check_by_size and self.size > other.size:
            return True
        if check_by_priority and self.priority < other.priority:
            return True
        return False