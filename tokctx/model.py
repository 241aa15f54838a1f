"""
Token values and position-keyed token streams.
"""

from __future__ import annotations

import sys
from bisect import bisect_left
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Tuple

__all__ = [
    "Token",
    "PositionedTokens",
    "SENTENCE_START",
    "SENTENCE_END",
    "START_POSITION",
    "END_POSITION",
    "START_TOKEN",
    "END_TOKEN",
]

SENTENCE_START = "<SENTENCE>"
SENTENCE_END = "</SENTENCE>"

# Sentinels sit strictly outside any real character offset.
START_POSITION = -1
END_POSITION = sys.maxsize


@dataclass(frozen=True)
class Token:
    """Smallest lexical unit: display text plus an opaque kind tag."""
    text: str
    kind: str

    @property
    def is_sentinel(self) -> bool:
        return self.kind == SENTENCE_START or self.kind == SENTENCE_END

    def with_text(self, text: str) -> Token:
        return replace(self, text=text)


START_TOKEN = Token(SENTENCE_START, SENTENCE_START)
END_TOKEN = Token(SENTENCE_END, SENTENCE_END)


class PositionedTokens(Mapping):
    """
    Immutable mapping from character offset to Token.

    Iteration always follows strictly increasing offsets, regardless of the
    order the entries were supplied in.
    """

    __slots__ = ("_keys", "_tokens")

    def __init__(self, entries: Mapping[int, Token] | Iterable[Tuple[int, Token]] = ()):
        tokens: Dict[int, Token] = dict(entries)
        self._keys: List[int] = sorted(tokens)
        self._tokens = tokens

    @classmethod
    def bracketed(cls, entries: Iterable[Tuple[int, Token]]) -> PositionedTokens:
        """Build a stream from raw scanner entries and add both sentinels."""
        tokens: Dict[int, Token] = {START_POSITION: START_TOKEN}
        tokens.update(entries)
        tokens[END_POSITION] = END_TOKEN
        return cls(tokens)

    # --- Mapping protocol ---

    def __getitem__(self, position: int) -> Token:
        return self._tokens[position]

    def __iter__(self) -> Iterator[int]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        body = ", ".join(f"{k}: {self._tokens[k]!r}" for k in self._keys)
        return f"PositionedTokens({{{body}}})"

    # --- range access ---

    def span(self, start: int, end: int) -> Iterator[Tuple[int, Token]]:
        """
        Iterate entries whose offset lies in [start, end).

        Keys are sorted, so the range is a contiguous slice found by binary
        search. Inverted or out-of-range bounds yield nothing.
        """
        if end <= start:
            return
        lo = bisect_left(self._keys, start)
        hi = bisect_left(self._keys, end)
        for key in self._keys[lo:hi]:
            yield key, self._tokens[key]

    # --- projections ---

    def tokens(self) -> List[Token]:
        return [self._tokens[k] for k in self._keys]

    def texts(self) -> List[str]:
        return [self._tokens[k].text for k in self._keys]

    def text_map(self) -> Dict[int, str]:
        return {k: self._tokens[k].text for k in self._keys}
