
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import starpr.vote
from starpr.vote import InvalidBallotScore, InvalidBallotLength

VALIDATOR = starpr.vote.BallotValidator()


@pytest.mark.parametrize(('ballot', 'outcome'), [
    ([5, 0, 3], 'valid'),
    ([0, 0, 1], 'valid'),
    ([None, 4, None], 'valid'),
    ([0, 0, 0], 'under'),
    ([None, None, None], 'under'),
    ([None, 0, None], 'under'),
    ([6, 0, 0], 'invalid'),
    ([-1, 3, 0], 'invalid'),
    ([2.5, 3, 0], 'invalid'),
    ([True, 3, 0], 'invalid'),
    (['x', 3, 0], 'invalid'),
    ([5, 3], 'invalid'),
    ([5, 3, 0, 0], 'invalid'),
])
def test_validation(ballot, outcome):
    parsed = VALIDATOR.parse([ballot], 3)
    assert parsed.n_valid == (outcome == 'valid')
    assert parsed.n_under == (outcome == 'under')
    assert parsed.n_invalid == (outcome == 'invalid')
    assert len(parsed.scores) == parsed.n_valid


def test_blanks_read_as_zero():
    parsed = VALIDATOR.parse([[None, 4, None], [1, None, 2]], 3)
    assert parsed.scores == [[0, 4, 0], [1, 0, 2]]


def test_counts():
    votes = [[5, 0], [0, 0], [7, 1], [None, 2], [], [3, 3]]
    parsed = VALIDATOR.parse(votes, 2)
    assert parsed.scores == [[5, 0], [0, 2], [3, 3]]
    assert (parsed.n_valid, parsed.n_invalid, parsed.n_under) == (3, 2, 1)
    assert votes[3] == [None, 2]


def test_custom_max_score():
    parsed = starpr.vote.BallotValidator(max_score=10).parse(
        [[10, 0], [11, 0]], 2
    )
    assert parsed.scores == [[10, 0]]
    assert parsed.n_invalid == 1


def test_passthrough():
    votes = [[9, 0], [0, 0], [None, 1]]
    parsed = starpr.vote.PassthroughValidator().parse(votes, 2)
    assert parsed.scores == [[9, 0], [0, 0], [0, 1]]
    assert (parsed.n_valid, parsed.n_invalid, parsed.n_under) == (3, 0, 0)


def test_check_ballot_ok():
    starpr.vote.check_ballot([0, 5, 2], 3)


def test_check_ballot_score():
    with pytest.raises(InvalidBallotScore) as excinfo:
        starpr.vote.check_ballot([0, 5, 6], 3)
    assert excinfo.value.value == 6
    assert excinfo.value.candidate_index == 2


def test_check_ballot_length():
    with pytest.raises(InvalidBallotLength) as excinfo:
        starpr.vote.check_ballot([0, 5], 3)
    assert excinfo.value.length == 2
    assert excinfo.value.expected == 3


@pytest.mark.parametrize('error', [
    InvalidBallotScore(6, 0),
    InvalidBallotLength(2, 3),
])
def test_vote_errors(error):
    assert isinstance(error, starpr.vote.VoteError)
    assert str(error)
