'''General evaluator machinery: the evaluator interface and its errors.'''

import abc
from typing import Any, Sequence


class VotingSystemError(Exception):
    '''An evaluation could not be carried out or ended in an invalid state.'''
    pass


class InvalidConfiguration(VotingSystemError, ValueError):
    '''The evaluator setup or the election parameters are unusable.

    E.g. more seats than candidates, or an unknown quota function.
    '''
    pass


class InsufficientBallots(VotingSystemError):
    '''There are no valid ballots to evaluate.'''

    def __init__(self, n_invalid: int = 0, n_under: int = 0):
        self.n_invalid = n_invalid
        self.n_under = n_under
        super().__init__(
            'no valid ballots to evaluate'
            f' ({n_invalid} invalid, {n_under} undervotes)'
        )


class InternalInvariantViolation(VotingSystemError):
    '''The evaluation reached a state its rules should make impossible.'''
    pass


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate ballots and elect a given number of candidates.'''
    @abc.abstractmethod
    def evaluate(self,
                 candidates: Sequence[str],
                 votes: Sequence[Sequence[Any]],
                 n_seats: int = 1,
                 ) -> Any:
        '''Elect n_seats candidates.

        :param candidates: Candidate names; the position of each name is the
            candidate index used by the ballots.
        :param votes: Ballots, one score per candidate.
        :param n_seats: Number of candidates to elect.
        '''
        raise NotImplementedError
