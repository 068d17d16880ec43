"""Token-level parsing helpers shared by contact plan readers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class ParsingError(Exception):
    """Raised when a contact plan element cannot be parsed."""


class Lexer(ABC):
    """A source of whitespace-separated tokens.

    ``lookup`` and ``consume_next_token`` return ``None`` once the input is
    exhausted and raise :class:`ParsingError` on read failures.
    """

    @abstractmethod
    def lookup(self) -> Optional[str]:
        """Return the next token without consuming it."""

    @abstractmethod
    def consume_next_token(self) -> Optional[str]:
        """Consume and return the next token."""

    @property
    @abstractmethod
    def current_position(self) -> str:
        """A human-readable description of the current position."""


class Dispatcher(Generic[T]):
    """Map of markers to functions that build a manager from a lexer."""

    def __init__(self) -> None:
        self._map: dict[str, Callable[[Lexer], T]] = {}

    def add(self, marker: str, coerce_fn: Callable[[Lexer], T]) -> None:
        """Register ``coerce_fn`` for ``marker``, replacing any earlier entry."""
        self._map[marker] = coerce_fn

    def get(self, marker: str) -> Optional[Callable[[Lexer], T]]:
        """Return the function registered for ``marker``, or ``None``."""
        return self._map.get(marker)

    def __contains__(self, marker: object) -> bool:
        return marker in self._map

    def __len__(self) -> int:
        return len(self._map)


def _failed(lexer: Lexer) -> ParsingError:
    return ParsingError(f"Parsing failed ({lexer.current_position})")


def read_value(lexer: Lexer, convert: Callable[[str], T]) -> T:
    """Consume one token and convert it with ``convert``.

    Raises :class:`ParsingError` at end of input or when conversion fails.
    """
    token = lexer.consume_next_token()
    if token is None:
        raise _failed(lexer)
    try:
        return convert(token)
    except (ValueError, TypeError) as exc:
        raise ParsingError(
            f"Unable to parse token '{token}' ({lexer.current_position})"
        ) from exc


def parse_dispatch(lexer: Lexer, dispatch_map: Optional[Dispatcher[Any]]) -> Any:
    """Read a marker token and delegate parsing to the function it names."""
    marker = lexer.consume_next_token()
    if marker is None:
        raise _failed(lexer)
    if dispatch_map is None:
        raise ParsingError(f"Dynamic parsing requires a map ({lexer.current_position})")
    parse_fn = dispatch_map.get(marker)
    if parse_fn is None:
        raise ParsingError(f"Unrecognized marker ({lexer.current_position})")
    return parse_fn(lexer)


def parse_components(
    lexer: Lexer,
    info_parser: Callable[[Lexer], Any],
    manager_parser: Optional[Callable[[Lexer], Any]],
    dispatch_map: Optional[Dispatcher[Any]] = None,
) -> tuple[Any, Any]:
    """Parse an info part followed by its manager.

    With a ``manager_parser`` the manager type is fixed and the map is
    ignored; without one the manager is chosen through ``dispatch_map``
    by the marker that precedes it.
    """
    info = info_parser(lexer)
    if manager_parser is not None:
        manager = manager_parser(lexer)
    else:
        manager = parse_dispatch(lexer, dispatch_map)
    return info, manager