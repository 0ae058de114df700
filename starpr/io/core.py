"""Shared functionality for ballot file input. Internal."""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, List, Tuple, Callable, Iterable, Optional, TextIO

from starpr.vote import RawBallot


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class ElectionData:
    """A container for data read from a ballot file.

    :param candidates: Candidate names in the column order of the file.
    :param votes: Raw ballots, one score (or None for blank) per candidate.
    :param election_name: Name of the race the ballots were cast in.
    :param ballot_ids: Identifiers of the ballots, in the order of votes.
    """
    candidates: List[str]
    votes: List[RawBallot]
    election_name: Optional[str] = None
    ballot_ids: List[str] = dataclasses.field(default_factory=list)


def loaders(line_loader: Callable[..., ElectionData]
            ) -> Tuple[Callable[..., ElectionData], Callable[..., ElectionData]]:
    """Create load() and loads() functions from a line iterating function."""
    return_annot = typing.get_type_hints(line_loader).get('return')
    if return_annot is None:
        return_annot = Any

    def load(file: TextIO, **kwargs) -> return_annot:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> return_annot:
        return line_loader(iter(text.splitlines()), **kwargs)

    return load, loads


def nonempty_lines(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        if line.strip():
            yield line
