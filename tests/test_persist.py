
import sys
import os
import json
from fractions import Fraction

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import starpr.persist
import starpr.component.quota
import starpr.component.tiebreak
from starpr.candidate import Candidate
from starpr.evaluate.allocated import AllocatedScore
from starpr.vote import BallotValidator, PassthroughValidator

VOTES = [[5, 0, 1], [3, 2, 0], [0, 5, 2], [4, 4, 0], [1, 0, 5]]


@pytest.mark.parametrize('obj', [
    AllocatedScore(),
    AllocatedScore(break_ties_randomly=False),
    AllocatedScore(quota_function='droop', seed=1711),
    AllocatedScore(enable_five_star_tiebreaker=True, max_score=10),
    AllocatedScore(validator=PassthroughValidator()),
    AllocatedScore(quota_function=starpr.component.quota.hagenbach_bischoff),
    BallotValidator(max_score=3),
    PassthroughValidator(),
    starpr.component.tiebreak.FiveStarTieBreaker('random_choice'),
    Candidate(2, 'Cal'),
])
def test_roundtrip(obj):
    dict_form = starpr.persist.to_dict(obj)
    serial = json.dumps(dict_form)
    roundtrip_dict_form = starpr.persist.from_dict(
        json.loads(serial)
    ).to_dict()
    assert dict_form == roundtrip_dict_form
    assert serial == json.dumps(roundtrip_dict_form)


def test_evaluator_dict():
    dict_form = AllocatedScore(seed=5).to_dict()
    assert dict_form['class'] == 'starpr.evaluate.allocated.AllocatedScore'
    assert dict_form['quota_function'] == {
        'callable': 'starpr.component.quota.hare'
    }
    assert dict_form['seed'] == 5
    assert dict_form['validator'] == {
        'class': 'starpr.vote.BallotValidator',
        'max_score': 5,
    }


def test_no_params():
    assert PassthroughValidator().to_dict() == {
        'class': 'starpr.vote.PassthroughValidator'
    }


def test_same_results():
    ev = AllocatedScore(break_ties_randomly=False, quota_function='droop')
    roundtripped = starpr.persist.from_dict(
        json.loads(json.dumps(starpr.persist.to_dict(ev)))
    )
    assert (
        ev.evaluate(list('ABC'), VOTES, 2)
        == roundtripped.evaluate(list('ABC'), VOTES, 2)
    )


def test_fraction():
    assert starpr.persist.serialize_value(Fraction(5, 2)) == {
        'type': 'Fraction', 'arguments': [5, 2]
    }
    assert starpr.persist.deserialize_value(
        {'type': 'Fraction', 'arguments': [5, 2]}
    ) == Fraction(5, 2)


@pytest.mark.parametrize('bad_def', [
    [1, 2],
    {'max_score': 5},
    {'class': '.vote.BallotValidator'},
])
def test_from_dict_invalid(bad_def):
    with pytest.raises(ValueError):
        starpr.persist.from_dict(bad_def)
