'''Allocated Score, also known as STAR-PR or Proportional STAR.

A proportional multi-winner method for score ballots. Every ballot starts
with a weight of one. In each round, the candidate with the highest sum of
scores weighted by the current ballot weights is elected. Then a quota of
ballot weight (by default the number of ballots divided by the number of
seats) is spent from the ballots that gave the winner the highest weighted
scores:

-   Ballots are ordered by their weighted score for the winner, highest
    first, and their weights are accumulated in that order.
-   The *split point* is the lowest weighted score among the leading
    ballots whose cumulative weight stays below the quota.
-   Ballots above the split point are spent in full (their weight drops to
    zero).
-   Ballots exactly at the split point share the rest of the quota: each of
    them loses the same fraction of its weight.

The winner's scores are then set to zero on all ballots, and the next
round begins, until the requested number of candidates is elected.

The evaluation is deterministic except for tie-breaking, which draws from
an explicit random generator (seeded by the evaluator or passed to
:meth:`AllocatedScore.evaluate`).
'''

from __future__ import annotations

import dataclasses
import logging
import operator
import random
from typing import Any, Callable, List, NamedTuple, Optional, Sequence, \
    Tuple, Union
from numbers import Number

import starpr.component.quota
import starpr.component.tiebreak
from starpr.candidate import Candidate, CandidateError, candidates_from_names
from starpr.component.normalize import ScoreNormalizer
from starpr.evaluate.core import Evaluator, InvalidConfiguration, \
    InsufficientBallots, InternalInvariantViolation
from starpr.persist import simple_serialization
from starpr.summary import SummaryData, build_summary
from starpr.vote import BallotValidator, Validator, RawBallot, check_ballot, \
    MAX_SCORE


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Results:
    '''Outcome of an Allocated Score evaluation.

    :param elected: Elected candidates, first elected first.
    :param tied: For each round, the candidates tied for the highest
        weighted score; empty if the round had a single leader.
    :param other: Candidates not elected, in candidate index order.
    :param summary_data: Ballot statistics and round telemetry.
    '''
    elected: List[Candidate]
    tied: List[List[Candidate]]
    other: List[Candidate]
    summary_data: SummaryData

    def display_order(self) -> List[Candidate]:
        '''Order for presenting the candidates: winners first.'''
        return self.elected + self.other


class WinnerScore(NamedTuple):
    '''A ballot's stake in the round winner.'''
    index: int
    ballot_weight: float
    weighted_score: float


class AllocationState:
    '''Working data of a single evaluation.

    Holds copies of the normalized scores and the ballot weights, and the
    flags of elected candidates. Scores and weights are modified in place
    as the rounds proceed; the arrays are never resized, so that the
    positions always match candidate and ballot indices.

    :param scores: Normalized scores, one row per ballot. Copied.
    '''
    def __init__(self, scores: Sequence[Sequence[float]]):
        self.scores = [list(ballot) for ballot in scores]
        self.weights = [1.] * len(self.scores)
        self.n_candidates = len(self.scores[0]) if self.scores else 0
        self.is_elected = [False] * self.n_candidates

    def active(self) -> List[int]:
        '''Return indices of the candidates not yet elected.'''
        return [
            cand_i for cand_i, done in enumerate(self.is_elected) if not done
        ]

    def weighted_sums(self) -> List[float]:
        '''Sum the weighted scores for each candidate.

        Ballots are added in their original order, so that the floating
        point results are reproducible.
        '''
        sums = [0.] * self.n_candidates
        for ballot, weight in zip(self.scores, self.weights):
            for cand_i, score in enumerate(ballot):
                sums[cand_i] += score * weight
        return sums

    def winner_scores(self, winner: int) -> List[WinnerScore]:
        return [
            WinnerScore(ballot_i, weight, ballot[winner] * weight)
            for ballot_i, (ballot, weight)
            in enumerate(zip(self.scores, self.weights))
        ]

    def commit(self, winner: int) -> None:
        '''Mark the candidate elected and zero its scores on all ballots.'''
        self.is_elected[winner] = True
        for ballot in self.scores:
            ballot[winner] = 0.


@simple_serialization
class AllocatedScore(Evaluator):
    '''Evaluate an Allocated Score (STAR-PR) election.

    :param quota_function: A callable producing the quota from the number
        of valid ballots and the number of seats, or the name of one from
        the :mod:`starpr.component.quota` module. Allocated Score is defined
        with the Hare quota.
    :param max_score: The highest score a ballot can give.
    :param break_ties_randomly: Whether to elect a random candidate among
        those tied for the highest weighted score. If False, the tied
        candidate with the lowest index is elected.
    :param enable_five_star_tiebreaker: Whether to resolve ties in favor of
        the candidate with the most maximum-score ballots first, applying the
        random or first-index rule only if that does not decide.
    :param seed: Seed for the random generator used for tie-breaking when
        no generator is passed to :meth:`evaluate`. None seeds from system
        entropy, making random tie-breaking irreproducible.
    :param validator: Ballot validator sorting raw ballots into valid,
        invalid and undervotes. Defaults to a
        :class:`starpr.vote.BallotValidator` with the same maximum score.
    '''
    def __init__(self,
                 quota_function: Union[
                     str, Callable[[int, int], Number]
                 ] = 'hare',
                 max_score: int = MAX_SCORE,
                 break_ties_randomly: bool = True,
                 enable_five_star_tiebreaker: bool = False,
                 seed: Optional[int] = None,
                 validator: Optional[Validator] = None,
                 ):
        try:
            self.quota_function = starpr.component.quota.construct(
                quota_function
            )
        except KeyError as e:
            raise InvalidConfiguration(e.args[0]) from e
        if not isinstance(max_score, int) or max_score < 1:
            raise InvalidConfiguration(f'invalid maximum score: {max_score!r}')
        self.max_score = max_score
        self.break_ties_randomly = break_ties_randomly
        self.enable_five_star_tiebreaker = enable_five_star_tiebreaker
        self.seed = seed
        if validator is None:
            validator = BallotValidator(max_score)
        self.validator = validator
        self._normalizer = ScoreNormalizer(max_score)
        self._tie_breaker = self._make_tie_breaker()

    def _make_tie_breaker(self) -> starpr.component.tiebreak.TieBreaker:
        fallback = (
            'random_choice' if self.break_ties_randomly else 'first_index'
        )
        if self.enable_five_star_tiebreaker:
            return starpr.component.tiebreak.FiveStarTieBreaker(fallback)
        else:
            return starpr.component.tiebreak.get(fallback)

    def evaluate(self,
                 candidates: Sequence[str],
                 votes: Sequence[RawBallot],
                 n_seats: int = 1,
                 rng: Optional[random.Random] = None,
                 ) -> Results:
        '''Elect candidates by Allocated Score.

        The inputs are not modified.

        :param candidates: Unique candidate names; the position of each name
            is the candidate index used by the ballots.
        :param votes: Raw ballots, one score per candidate in index order.
        :param n_seats: Number of candidates to elect.
        :param rng: Random generator for tie-breaking. If not given, a new
            one seeded with the evaluator's seed is used.
        :raises InvalidConfiguration: If the candidate names are not unique
            or the number of seats is not between one and the number of
            candidates.
        :raises InsufficientBallots: If there are no valid ballots.
        :raises starpr.vote.VoteError: If the validator passes a ballot
            that does not score all candidates with allowed scores.
        '''
        cands = self._make_candidates(candidates)
        if (not isinstance(n_seats, int) or isinstance(n_seats, bool)
                or not 1 <= n_seats <= len(cands)):
            raise InvalidConfiguration(
                f'cannot elect {n_seats!r} of {len(cands)} candidates'
            )
        parsed = self.validator.parse(votes, len(cands))
        for ballot in parsed.scores:
            check_ballot(ballot, len(cands), self.max_score)
        logger.info('%d valid ballots, %d invalid, %d undervotes',
                    parsed.n_valid, parsed.n_invalid, parsed.n_under)
        if not parsed.scores:
            raise InsufficientBallots(parsed.n_invalid, parsed.n_under)
        summary = build_summary(cands, parsed, self.max_score)
        if rng is None:
            rng = random.Random(self.seed)
        quota = float(self.quota_function(len(parsed.scores), n_seats))
        logger.info('quota computed at %g', quota)
        state = AllocationState(self._normalizer.normalize(parsed.scores))
        elected = []
        tied = []
        while len(elected) < n_seats:
            logger.info('proceeding to round %d', len(elected) + 1)
            winner, round_ties = self.next_round(state, summary, quota, rng)
            elected.append(cands[winner])
            tied.append([cands[cand_i] for cand_i in round_ties])
        return Results(
            elected=elected,
            tied=tied,
            other=[cands[cand_i] for cand_i in state.active()],
            summary_data=summary,
        )

    def next_round(self,
                   state: AllocationState,
                   summary: SummaryData,
                   quota: float,
                   rng: random.Random,
                   ) -> Tuple[int, List[int]]:
        '''Elect one candidate and spend a quota of ballot weight on them.

        Updates the state and appends the round telemetry to the summary.

        :param state: Working scores, weights and elected flags.
        :param summary: Summary data to record the round into.
        :param quota: Ballot weight to spend on the winner.
        :param rng: Random generator for tie-breaking.
        :returns: A 2-tuple with the index of the winner and the indices of
            candidates tied for the win (empty if there was no tie).
        '''
        active = state.active()
        if not active:
            raise InternalInvariantViolation(
                'no candidates left to elect'
            )
        sums = state.weighted_sums()
        logger.debug('weighted score sums: %s', sums)
        summary.weighted_scores_by_round.append(
            self._normalizer.rescale(sums)
        )
        summary.candidates_by_round.append(
            [summary.candidates[cand_i] for cand_i in active]
        )
        winner, round_ties = self._select_winner(sums, active, summary, rng)
        logger.info('%s elected with weighted score %g',
                    summary.candidates[winner], sums[winner] * self.max_score)
        winner_scores = state.winner_scores(winner)
        state.commit(winner)
        split_point = find_split_point(
            sorted(
                winner_scores,
                key=operator.attrgetter('weighted_score'),
                reverse=True,
            ),
            quota
        )
        spent_above = sum(
            item.ballot_weight for item in winner_scores
            if item.weighted_score > split_point
        )
        weights = [
            0. if item.weighted_score > split_point else item.ballot_weight
            for item in winner_scores
        ]
        weight_on_split = find_weight_on_split(winner_scores, split_point)
        logger.debug('split point %g, spent above %g, weight on split %g',
                     split_point, spent_above, weight_on_split)
        summary.split_points.append(split_point)
        summary.spent_aboves.append(spent_above)
        summary.weight_on_splits.append(weight_on_split)
        state.weights = update_ballot_weights(
            winner_scores, weights, weight_on_split,
            quota, spent_above, split_point,
        )
        return winner, round_ties

    def _select_winner(self,
                       sums: List[float],
                       active: List[int],
                       summary: SummaryData,
                       rng: random.Random,
                       ) -> Tuple[int, List[int]]:
        best = max(sums[cand_i] for cand_i in active)
        leaders = [cand_i for cand_i in active if sums[cand_i] == best]
        if len(leaders) == 1:
            return leaders[0], []
        logger.info('%s are tied best',
                    [str(summary.candidates[cand_i]) for cand_i in leaders])
        return self._tie_breaker(leaders, summary, rng), leaders

    @staticmethod
    def _make_candidates(names: Sequence[Any]) -> List[Candidate]:
        try:
            return candidates_from_names(
                [str(name) for name in names]
            )
        except CandidateError as e:
            raise InvalidConfiguration(str(e)) from e


def find_split_point(sorted_scores: Sequence[WinnerScore],
                     quota: float,
                     ) -> float:
    '''Find the weighted score at which the quota is filled.

    :param sorted_scores: Ballot stakes in the winner, highest weighted
        score first.
    :param quota: Ballot weight to spend.
    :returns: The lowest weighted score among the leading ballots whose
        cumulative weight stays strictly below the quota. If the first ballot
        alone reaches the quota, its weighted score.
    '''
    cum_weight = 0.
    under_quota = []
    for item in sorted_scores:
        cum_weight += item.ballot_weight
        if cum_weight < quota:
            under_quota.append(item.weighted_score)
        else:
            break
    if under_quota:
        return min(under_quota)
    else:
        # spend from the top ballot rather than from none at all
        return sorted_scores[0].weighted_score


def find_weight_on_split(winner_scores: Sequence[WinnerScore],
                         split_point: float,
                         ) -> float:
    '''Sum the weight of ballots exactly at the split point.'''
    return sum(
        item.ballot_weight for item in winner_scores
        if item.weighted_score == split_point
    )


def update_ballot_weights(winner_scores: Sequence[WinnerScore],
                          weights: List[float],
                          weight_on_split: float,
                          quota: float,
                          spent_above: float,
                          split_point: float,
                          ) -> List[float]:
    '''Spend the remainder of the quota from ballots at the split point.

    :param winner_scores: Ballot stakes in the winner, in ballot order.
    :param weights: Ballot weights with the ballots above the split point
        already spent.
    :param weight_on_split: Total weight of ballots at the split point.
    :param quota: Ballot weight to spend.
    :param spent_above: Weight already spent from ballots above the split
        point.
    :param split_point: Weighted score at the split point.
    :returns: New ballot weights, clamped to the [0, 1] interval.
    '''
    weights = list(weights)
    if weight_on_split > 0:
        spend_fraction = (quota - spent_above) / weight_on_split
        logger.debug('spending %g of weight at split point', spend_fraction)
        for item in winner_scores:
            if item.weighted_score == split_point:
                weights[item.index] *= (1 - spend_fraction)
    return [min(max(weight, 0.), 1.) for weight in weights]
