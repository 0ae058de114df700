'''Aggregate statistics of score ballots.

The summary data condenses the valid ballots of an election into the
figures needed to present and audit it: total scores, score histograms,
head-to-head preference counts and the pairwise win matrix derived from
them, and vote counts. The Allocated Score evaluator then appends its
round-by-round telemetry to the same object.

All candidate-indexed structures are lists ordered by candidate index. To
display them in another order (e.g. winners first), use
:func:`sort_summary`, which builds a new, reindexed copy.
'''

from __future__ import annotations

import dataclasses
from typing import List, Sequence

from starpr.candidate import Candidate
from starpr.vote import ParsedBallots, MAX_SCORE


Matrix = List[List[int]]


@dataclasses.dataclass
class SummaryData:
    '''Aggregate ballot statistics and round telemetry of one evaluation.

    :param candidates: Candidates, in index order.
    :param total_scores: Sum of raw scores for each candidate.
    :param score_hist: For each candidate, the number of ballots giving it
        each score from 0 to the maximum score.
    :param preference_matrix: ``preference_matrix[i][j]`` is the number of
        ballots scoring candidate i higher than candidate j.
    :param pairwise_matrix: ``pairwise_matrix[i][j]`` is 1 if more ballots
        prefer i to j than j to i, 0 otherwise.
    :param n_valid_votes: Number of valid ballots.
    :param n_invalid_votes: Number of invalid ballots.
    :param n_under_votes: Number of ballots scoring nobody.
    :param n_bullet_votes: Number of valid ballots scoring exactly one
        candidate above zero.
    :param split_points: Weighted score at the quota boundary, per round.
    :param spent_aboves: Ballot weight spent in full, per round.
    :param weight_on_splits: Ballot weight at the split point, per round.
    :param weighted_scores_by_round: Weighted score sums rescaled to the raw
        score range, one row per round, columns in candidate index order.
    :param candidates_by_round: Candidates still unelected at the start of
        each round.
    '''
    candidates: List[Candidate]
    total_scores: List[int]
    score_hist: Matrix
    preference_matrix: Matrix
    pairwise_matrix: Matrix
    n_valid_votes: int = 0
    n_invalid_votes: int = 0
    n_under_votes: int = 0
    n_bullet_votes: int = 0
    split_points: List[float] = dataclasses.field(default_factory=list)
    spent_aboves: List[float] = dataclasses.field(default_factory=list)
    weight_on_splits: List[float] = dataclasses.field(default_factory=list)
    weighted_scores_by_round: List[List[float]] = dataclasses.field(
        default_factory=list
    )
    candidates_by_round: List[List[Candidate]] = dataclasses.field(
        default_factory=list
    )

    @property
    def n_rounds(self) -> int:
        return len(self.weighted_scores_by_round)


def build_summary(candidates: Sequence[Candidate],
                  parsed: ParsedBallots,
                  max_score: int = MAX_SCORE,
                  ) -> SummaryData:
    '''Compute aggregate statistics from validated ballots.

    The result does not depend on the order of the ballots and the input is
    left untouched. The telemetry lists of the result are empty.

    :param candidates: Candidates in index order.
    :param parsed: Validator output; its scores must be complete lists of
        integers between 0 and max_score.
    :param max_score: The highest allowed score, determining the size of
        the histograms.
    '''
    n_cands = len(candidates)
    total_scores = [0] * n_cands
    score_hist = [[0] * (max_score + 1) for i in range(n_cands)]
    preference = [[0] * n_cands for i in range(n_cands)]
    n_bullet_votes = 0
    for ballot in parsed.scores:
        n_supported = 0
        for i, score in enumerate(ballot):
            total_scores[i] += score
            score_hist[i][score] += 1
            pref_row = preference[i]
            for j, other_score in enumerate(ballot):
                if score > other_score:
                    pref_row[j] += 1
            if score > 0:
                n_supported += 1
        if n_supported == 1:
            n_bullet_votes += 1
    return SummaryData(
        candidates=list(candidates),
        total_scores=total_scores,
        score_hist=score_hist,
        preference_matrix=preference,
        pairwise_matrix=pairwise_wins(preference),
        n_valid_votes=parsed.n_valid,
        n_invalid_votes=parsed.n_invalid,
        n_under_votes=parsed.n_under,
        n_bullet_votes=n_bullet_votes,
    )


def pairwise_wins(preference: Matrix) -> Matrix:
    '''Derive the head-to-head win matrix from preference counts.

    Candidate i beats j if strictly more ballots prefer i to j than the
    other way round. Head-to-head ties leave 0 in both directions.
    '''
    n_cands = len(preference)
    return [
        [
            int(preference[i][j] > preference[j][i])
            for j in range(n_cands)
        ]
        for i in range(n_cands)
    ]


def sort_summary(summary: SummaryData,
                 order: Sequence[Candidate],
                 ) -> SummaryData:
    '''Reorder the summary data for display.

    Returns a new summary with candidates, total scores, histograms and
    both matrices permuted into the given order. The candidates get new
    indices matching their new positions; the input summary (including its
    candidate objects) is not modified. Round telemetry is not indexed by
    candidate and is copied over unchanged.

    :param summary: Summary to reorder.
    :param order: All candidates of the summary in the desired order.
    :raises ValueError: If the order is not a permutation of the summary
        candidates.
    '''
    index_order = [cand.index for cand in order]
    if sorted(index_order) != list(range(len(summary.candidates))):
        raise ValueError(
            f'order {list(order)!r} is not a permutation of the candidates'
        )
    return SummaryData(
        candidates=[
            Candidate(new_i, summary.candidates[old_i].name)
            for new_i, old_i in enumerate(index_order)
        ],
        total_scores=[summary.total_scores[i] for i in index_order],
        score_hist=[list(summary.score_hist[i]) for i in index_order],
        preference_matrix=sort_matrix(summary.preference_matrix, index_order),
        pairwise_matrix=sort_matrix(summary.pairwise_matrix, index_order),
        n_valid_votes=summary.n_valid_votes,
        n_invalid_votes=summary.n_invalid_votes,
        n_under_votes=summary.n_under_votes,
        n_bullet_votes=summary.n_bullet_votes,
        split_points=list(summary.split_points),
        spent_aboves=list(summary.spent_aboves),
        weight_on_splits=list(summary.weight_on_splits),
        weighted_scores_by_round=[
            list(row) for row in summary.weighted_scores_by_round
        ],
        candidates_by_round=[
            list(row) for row in summary.candidates_by_round
        ],
    )


def sort_matrix(matrix: Matrix, index_order: Sequence[int]) -> Matrix:
    '''Permute both rows and columns of a square matrix into a new one.'''
    return [[matrix[i][j] for j in index_order] for i in index_order]
