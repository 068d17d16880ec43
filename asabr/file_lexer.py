"""A lexer reading whitespace-separated tokens from a contact plan file."""

from __future__ import annotations

import os
from collections import deque
from typing import Optional, Union

from .parsing import Lexer, ParsingError


class FileLexer(Lexer):
    """Tokenises a file line by line.

    Blank lines and lines whose first non-blank character is ``#`` are
    skipped. The file is opened on construction; use the lexer as a
    context manager or call :meth:`close` when done.
    """

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        self._file = open(filename, encoding="utf-8")
        self._tokens: deque[str] = deque()
        self._lookup_line = 0
        self._current_line = 0
        self._token_position = 0

    def _fill(self) -> None:
        try:
            for line in self._file:
                self._lookup_line += 1
                if line.lstrip().startswith("#"):
                    continue
                words = line.split()
                if words:
                    self._tokens.extend(words)
                    return
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            raise ParsingError(str(exc)) from exc

    def lookup(self) -> Optional[str]:
        if not self._tokens:
            self._fill()
        return self._tokens[0] if self._tokens else None

    def consume_next_token(self) -> Optional[str]:
        if not self._tokens:
            self._fill()
        if not self._tokens:
            return None
        word = self._tokens.popleft()
        if self._current_line != self._lookup_line:
            self._token_position = 0
            self._current_line = self._lookup_line
        self._token_position += 1
        return word

    @property
    def current_position(self) -> str:
        return f"line {self._current_line}, token {self._token_position}"

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> FileLexer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()