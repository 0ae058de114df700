
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import starpr.candidate
from starpr.candidate import Candidate


def test_from_names():
    cands = starpr.candidate.candidates_from_names(['Ann', 'Ben', 'Cal'])
    assert [cand.index for cand in cands] == [0, 1, 2]
    assert [str(cand) for cand in cands] == ['Ann', 'Ben', 'Cal']


def test_empty():
    assert starpr.candidate.candidates_from_names([]) == []


def test_duplicate():
    with pytest.raises(starpr.candidate.CandidateError) as excinfo:
        starpr.candidate.candidates_from_names(['Ann', 'Ben', 'Ann'])
    assert excinfo.value.candidate == 'Ann'


def test_immutable():
    cand = Candidate(0, 'Ann')
    with pytest.raises(AttributeError):
        cand.index = 1


def test_equality():
    assert Candidate(0, 'Ann') == Candidate(0, 'Ann')
    assert Candidate(0, 'Ann') != Candidate(1, 'Ann')
    assert len({Candidate(0, 'Ann'), Candidate(0, 'Ann')}) == 1
