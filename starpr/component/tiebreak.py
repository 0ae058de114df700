'''Tie-breakers for Allocated Score rounds.

When several candidates share the highest weighted score sum of a round,
a tie-breaker picks the round winner among them. A tie-breaker is called
with the indices of the tied candidates (in ascending order), the summary
data of the election and a random generator, and returns the index of the
winner. Tie-breakers must draw all randomness from the generator they are
given so that seeded evaluations are reproducible.

Basic tie-breakers are registered in the `TIEBREAKERS` dictionary by name.
'''

import random
from typing import Callable, Dict, List, Union

import starpr.component.core
from starpr.persist import simple_serialization
from starpr.summary import SummaryData


TieBreaker = Callable[[List[int], SummaryData, random.Random], int]

TIEBREAKERS: Dict[str, TieBreaker] = {}


tiebreaker_mark, get, construct = starpr.component.core.register_functions(
    TIEBREAKERS, 'tie-breaker'
)


@tiebreaker_mark
def first_index(tied: List[int],
                summary: SummaryData,
                rng: random.Random,
                ) -> int:
    '''Elect the tied candidate that comes first in the candidate list.'''
    return min(tied)


@tiebreaker_mark
def random_choice(tied: List[int],
                  summary: SummaryData,
                  rng: random.Random,
                  ) -> int:
    '''Elect one of the tied candidates with equal probability.'''
    return tied[rng.randrange(len(tied))]


def most_top_scores(tied: List[int], summary: SummaryData) -> List[int]:
    '''Return the tied candidates with the most maximum-score ballots.'''
    top_counts = {cand_i: summary.score_hist[cand_i][-1] for cand_i in tied}
    most = max(top_counts.values())
    return [cand_i for cand_i in tied if top_counts[cand_i] == most]


@simple_serialization
class FiveStarTieBreaker:
    '''Break ties by the number of five-star (maximum score) ballots.

    The tied candidate scored with the maximum score by the most voters
    wins. If that still leaves a tie, the fallback tie-breaker decides
    among the remaining candidates.

    :param fallback: Tie-breaker for the candidates with equal numbers of
        maximum scores, or its name in `TIEBREAKERS`.
    '''
    def __init__(self, fallback: Union[str, TieBreaker] = 'first_index'):
        self.fallback = construct(fallback)

    def __call__(self,
                 tied: List[int],
                 summary: SummaryData,
                 rng: random.Random,
                 ) -> int:
        remaining = most_top_scores(tied, summary)
        if len(remaining) == 1:
            return remaining[0]
        return self.fallback(remaining, summary, rng)
