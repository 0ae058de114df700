'''Candidates standing in an election.

Every candidate of an Allocated Score election is identified by its index,
its position in the candidate list the election was set up with. The index
addresses the candidate's column in ballots and its row and column in every
matrix of the summary data, so it must not change during an evaluation.
The name is only carried along for display.
'''

from __future__ import annotations

import dataclasses
from typing import List, Sequence

from starpr.persist import simple_serialization


class CandidateError(Exception):
    '''The candidate list is invalid.

    :param candidate: Candidate that was found to be invalid.
    :param reason: What is wrong with it.
    '''
    def __init__(self, candidate: str, reason: str):
        self.candidate = candidate
        self.reason = reason
        super().__init__(f'invalid candidate {candidate!r}: {reason}')


@simple_serialization
@dataclasses.dataclass(frozen=True)
class Candidate:
    '''A candidate standing for the election.

    :param index: Canonical position of the candidate.
    :param name: Name of the candidate, in any customary text format.
    '''
    index: int
    name: str

    def __str__(self) -> str:
        return self.name


def candidates_from_names(names: Sequence[str]) -> List[Candidate]:
    '''Create candidate objects indexed by their position in the list.

    :param names: Unique candidate names.
    :raises CandidateError: If a name is repeated.
    '''
    seen = set()
    for name in names:
        if name in seen:
            raise CandidateError(name, 'duplicate candidate name')
        seen.add(name)
    return [Candidate(i, name) for i, name in enumerate(names)]
