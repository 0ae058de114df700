'''Score ballots, vote errors and ballot validators.

A score ballot is a sequence of integer scores, one per candidate in
candidate index order, each between 0 and the maximum score (5 for STAR
elections). A blank (``None``) score means the voter left the candidate
unscored, which counts as 0.

Ballot validation policy is not part of the Allocated Score method itself;
the evaluator delegates it to a validator object called once before the
count. :class:`BallotValidator` sorts raw ballots into valid, invalid and
undervoted ones; :class:`PassthroughValidator` accepts everything for
callers that validated the ballots elsewhere.

Whatever the validator lets through is checked once more by
:func:`check_ballot` before counting. If a ballot is malformed at that
point, a subclass of :class:`VoteError` is raised.
'''

import abc
import dataclasses
from typing import Any, List, Optional, Sequence

from starpr.persist import simple_serialization


MIN_SCORE = 0
MAX_SCORE = 5

RawBallot = Sequence[Optional[Any]]
ScoreBallot = List[int]


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid given the election rules.'''
    pass


class InvalidBallotScore(VoteError):
    '''A score on a ballot is not an integer in the allowed range.

    :param value: The offending score.
    :param candidate_index: Index of the candidate the score was given to.
    :param max_score: The highest allowed score.
    '''
    def __init__(self,
                 value: Any,
                 candidate_index: int,
                 max_score: int = MAX_SCORE,
                 ):
        self.value = value
        self.candidate_index = candidate_index
        self.max_score = max_score
        super().__init__(
            f'invalid score {value!r} for candidate {candidate_index},'
            f' must be an integer from {MIN_SCORE} to {max_score}'
        )


class InvalidBallotLength(VoteError):
    '''A ballot does not score the right number of candidates.

    :param length: Number of scores found on the ballot.
    :param expected: Number of candidates in the election.
    '''
    def __init__(self, length: int, expected: int):
        self.length = length
        self.expected = expected
        super().__init__(
            f'ballot has {length} scores, expected {expected}'
        )


@dataclasses.dataclass
class ParsedBallots:
    '''Output of a ballot validator.

    :param scores: Valid ballots as lists of integer scores.
    :param n_valid: Number of valid ballots.
    :param n_invalid: Number of ballots rejected as invalid.
    :param n_under: Number of undervotes (ballots scoring nobody).
    '''
    scores: List[ScoreBallot]
    n_valid: int
    n_invalid: int = 0
    n_under: int = 0


def is_valid_score(value: Any, max_score: int = MAX_SCORE) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and MIN_SCORE <= value <= max_score
    )


def check_ballot(ballot: Sequence[Any],
                 n_candidates: int,
                 max_score: int = MAX_SCORE,
                 ) -> None:
    '''Check that the ballot is a complete list of allowed scores.

    :param ballot: Ballot to be checked.
    :param n_candidates: Number of candidates in the election.
    :param max_score: The highest allowed score.
    :raises InvalidBallotLength: If the ballot does not have one score for
        every candidate.
    :raises InvalidBallotScore: If any score is not an integer between 0
        and max_score.
    '''
    if len(ballot) != n_candidates:
        raise InvalidBallotLength(len(ballot), n_candidates)
    for cand_i, score in enumerate(ballot):
        if not is_valid_score(score, max_score):
            raise InvalidBallotScore(score, cand_i, max_score)


class Validator(metaclass=abc.ABCMeta):
    '''An abstract ballot validator.'''
    @abc.abstractmethod
    def parse(self,
              votes: Sequence[RawBallot],
              n_candidates: int,
              ) -> ParsedBallots:
        '''Sort ballots into valid, invalid and undervotes.

        :param votes: Raw ballots.
        :param n_candidates: Number of candidates in the election.
        '''
        raise NotImplementedError


@simple_serialization
class BallotValidator(Validator):
    '''Validate raw score ballots.

    A ballot is invalid if it does not have one entry per candidate, or if
    any of its entries is neither blank nor an integer score in the allowed
    range. A valid ballot that scores no candidate above zero is an
    undervote; it is counted but not used for the evaluation.

    :param max_score: The highest allowed score.
    '''
    def __init__(self, max_score: int = MAX_SCORE):
        self.max_score = max_score

    def parse(self,
              votes: Sequence[RawBallot],
              n_candidates: int,
              ) -> ParsedBallots:
        scores = []
        n_invalid = 0
        n_under = 0
        for ballot in votes:
            filled = [0 if score is None else score for score in ballot]
            try:
                check_ballot(filled, n_candidates, self.max_score)
            except VoteError:
                n_invalid += 1
                continue
            if any(score > 0 for score in filled):
                scores.append(filled)
            else:
                n_under += 1
        return ParsedBallots(
            scores=scores,
            n_valid=len(scores),
            n_invalid=n_invalid,
            n_under=n_under,
        )


@simple_serialization
class PassthroughValidator(Validator):
    '''Accept all ballots as valid.

    For ballots that have already been validated by an outside system.
    Blank scores are still read as zeros.
    '''
    def parse(self,
              votes: Sequence[RawBallot],
              n_candidates: int,
              ) -> ParsedBallots:
        scores = [
            [0 if score is None else score for score in ballot]
            for ballot in votes
        ]
        return ParsedBallots(scores=scores, n_valid=len(scores))
