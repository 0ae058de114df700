'''Quota functions for Allocated Score.

A quota function takes the total number of ballots and the number of seats
to fill and returns the amount of ballot weight a winner has to spend. The
Allocated Score evaluator computes the quota once before the first round
and never recomputes it.

The unrounded quota functions return fractions to retain exact values;
the evaluator converts the quota to a float once, since ballot weights are
floats.

All supported quota functions are assembled in the `QUOTAS` dictionary keyed
by their name. `get()` retrieves from this dictionary by string key;
`construct()` also accepts callables and passes them through.
'''

from fractions import Fraction
from typing import Dict, Callable
from numbers import Number

import starpr.component.core


QUOTAS: Dict[str, Callable[[int, int], Number]] = {}


quota_mark, get, construct = starpr.component.core.register_functions(
    QUOTAS, 'quota'
)


@quota_mark
def hare(votes: int, seats: int) -> Fraction:
    '''Hare quota, the number of ballots per seat.

    This is the quota Allocated Score is defined with: every winner
    consumes an equal share of the electorate.
    '''
    return Fraction(votes, seats)


@quota_mark
def droop(votes: int, seats: int) -> int:
    '''Droop quota.

    The smallest integer quota guaranteeing the number of candidates
    reaching it will not be higher than the number of seats.
    '''
    return int(Fraction(votes, seats + 1)) + 1


@quota_mark
def hagenbach_bischoff(votes: int, seats: int) -> Fraction:
    '''Hagenbach-Bischoff quota, the unrounded Droop variant.'''
    return Fraction(votes, seats + 1)
