'''Score normalization.

Allocated Score works with ballot scores rescaled to the unit interval so
that a ballot's weighted score for a candidate never exceeds its weight.
'''

from typing import List, Sequence

from starpr.persist import simple_serialization
from starpr.vote import MAX_SCORE


def normalize_scores(scores: Sequence[Sequence[int]],
                     max_score: int = MAX_SCORE,
                     ) -> List[List[float]]:
    '''Rescale raw ballot scores to the [0, 1] range.

    Always returns a new matrix; the input is not modified, so the result
    can be used as a working copy.

    :param scores: Raw scores, one row per ballot, one column per candidate,
        each in the range from 0 to max_score.
    :param max_score: The highest score a ballot can give.
    '''
    return [[score / max_score for score in ballot] for ballot in scores]


@simple_serialization
class ScoreNormalizer:
    '''Rescale raw ballot scores to fractions of the maximum score.

    :param max_score: The highest score a ballot can give.
    '''
    def __init__(self, max_score: int = MAX_SCORE):
        self.max_score = max_score

    def normalize(self,
                  scores: Sequence[Sequence[int]],
                  ) -> List[List[float]]:
        return normalize_scores(scores, self.max_score)

    def rescale(self, values: Sequence[float]) -> List[float]:
        '''Map normalized values back to the raw score range.'''
        return [value * self.max_score for value in values]
