
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import starpr.io.ballots
from starpr.io.ballots import BallotFileParseError
from starpr.evaluate.allocated import AllocatedScore

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')

EVALUATOR = AllocatedScore(break_ties_randomly=False)


def _load(race):
    path = os.path.join(DATA_DIR, 'ballots.csv')
    with open(path, encoding='utf8') as infile:
        return starpr.io.ballots.load(infile, race=race)


def test_load_council():
    election = _load('Council')
    assert election.election_name == 'Council'
    assert election.candidates == ['Ann', 'Ben', 'Cal', 'Dee']
    assert election.ballot_ids == ['b1', 'b2', 'b3', 'b4', 'b5', 'b6', 'b7']
    assert election.votes[0] == [5, 4, 0, 0]
    assert election.votes[5] == [None, None, None, None]
    assert election.votes[6] == [5, 'x', 0, 0]


def test_evaluate_council():
    election = _load('Council')
    results = EVALUATOR.evaluate(election.candidates, election.votes, 2)
    assert [cand.name for cand in results.elected] == ['Cal', 'Ann']
    assert [cand.name for cand in results.other] == ['Ben', 'Dee']
    summary = results.summary_data
    assert summary.n_valid_votes == 5
    assert summary.n_invalid_votes == 1
    assert summary.n_under_votes == 1
    assert summary.total_scores == [11, 8, 14, 13]
    assert summary.weighted_scores_by_round[0] == pytest.approx(
        [11., 8., 14., 13.]
    )
    assert summary.weighted_scores_by_round[1] == pytest.approx(
        [10., 7., 0., 6.]
    )


def test_evaluate_mayor():
    election = _load('Mayor')
    assert election.candidates == ['X', 'Y']
    results = EVALUATOR.evaluate(election.candidates, election.votes, 1)
    assert [cand.name for cand in results.elected] == ['X']
    summary = results.summary_data
    assert summary.n_valid_votes == 5
    assert summary.n_invalid_votes == 0
    assert summary.n_under_votes == 2


def test_single_race_default():
    election = starpr.io.ballots.loads(
        'ballot_id,precinct,Mayor!!X,Mayor!!Y\n'
        'b1,P1,5,0\n'
        '\n'
        'b2,P1,0,3\n'
    )
    assert election.election_name == 'Mayor'
    assert election.votes == [[5, 0], [0, 3]]


def test_name_with_separator():
    election = starpr.io.ballots.loads(
        'ballot_id,Board!!Ann!!Jr.,Board!!Ben\nb1,4,2\n'
    )
    assert election.candidates == ['Ann!!Jr.', 'Ben']


def test_quoted_cells():
    election = starpr.io.ballots.loads(
        'ballot_id,"Board!!Smith, Ann",Board!!Ben\nb1, 4 ,2\n'
    )
    assert election.candidates == ['Smith, Ann', 'Ben']
    assert election.votes == [[4, 2]]


@pytest.mark.parametrize('text', [
    '',
    '\n\n',
    'precinct,Board!!Ann\nP1,5\n',
    'ballot_id,precinct\nb1,P1\n',
    'ballot_id,Ann,Ben\nb1,5,0\n',
    'ballot_id,Board!!Ann,Board!!Ben\nb1,5\n',
    'ballot_id,A!!X,B!!Y\nb1,5,0\n',
])
def test_invalid(text):
    with pytest.raises(BallotFileParseError):
        starpr.io.ballots.loads(text)


def test_unknown_race():
    with pytest.raises(BallotFileParseError):
        _load('Sheriff')


def test_several_races():
    with pytest.raises(BallotFileParseError):
        _load(None)


def test_parse_error_hierarchy():
    assert issubclass(BallotFileParseError, starpr.io.core.ParseError)


def test_byte_order_mark_file():
    path = os.path.join(DATA_DIR, 'ballots_bom.csv')
    with open(path, encoding='utf8') as infile:
        election = starpr.io.ballots.load(infile)
    assert election.election_name == 'Mayor'
    assert election.candidates == ['X', 'Y']
    assert election.ballot_ids == ['b1', 'b2', 'b3']
    assert election.votes == [[5, 0], [2, 4], [0, 5]]


def test_byte_order_mark_text():
    election = starpr.io.ballots.loads(
        '\ufeffballot_id,precinct,Race!!A,Race!!B\n1,p,5,0\n'
    )
    assert election.candidates == ['A', 'B']
    assert election.ballot_ids == ['1']
