"""Ballot data in the exported CSV format.

The export has one row per ballot. The first two columns are ``ballot_id``
and ``precinct``; every other column holds the scores of one candidate in
one race and is labelled ``<race title>!!<candidate name>``. A ballot that
did not vote in a race has empty cells in its columns.

Only one race is loaded at a time. Empty cells become blank (None) scores;
cells that are not integers are passed on as they are, so that the ballot
validator can reject them.
"""

import csv
from typing import Dict, Iterable, List, Optional, Union

import starpr.io.core
from starpr.io.core import ElectionData


RACE_SEPARATOR = '!!'
ID_COLUMN = 'ballot_id'
PRECINCT_COLUMN = 'precinct'
BYTE_ORDER_MARK = '\ufeff'


class BallotFileParseError(starpr.io.core.ParseError):
    pass


def load_lines(lines: Iterable[str],
               race: Optional[str] = None,
               ) -> ElectionData:
    reader = csv.reader(starpr.io.core.nonempty_lines(lines))
    try:
        header = next(reader)
    except StopIteration as e:
        raise BallotFileParseError('empty ballot file') from e
    if header:
        header[0] = header[0].lstrip(BYTE_ORDER_MARK)
    if ID_COLUMN not in header:
        raise BallotFileParseError(f'missing {ID_COLUMN} column')
    races = _race_columns(header)
    race = _select_race(races, race)
    columns = races[race]
    id_col = header.index(ID_COLUMN)
    votes = []
    ballot_ids = []
    for row_i, row in enumerate(reader):
        if len(row) != len(header):
            raise BallotFileParseError(
                f'row {row_i + 2} has {len(row)} cells,'
                f' expected {len(header)}'
            )
        ballot_ids.append(row[id_col])
        votes.append([_parse_score(row[col_i]) for col_i, _ in columns])
    return ElectionData(
        candidates=[name for _, name in columns],
        votes=votes,
        election_name=race,
        ballot_ids=ballot_ids,
    )


load, loads = starpr.io.core.loaders(load_lines)


def _race_columns(header: List[str]) -> Dict[str, List[tuple]]:
    races = {}
    for col_i, label in enumerate(header):
        if label in (ID_COLUMN, PRECINCT_COLUMN):
            continue
        if RACE_SEPARATOR not in label:
            raise BallotFileParseError(f'invalid candidate column: {label!r}')
        title, name = label.split(RACE_SEPARATOR, 1)
        races.setdefault(title, []).append((col_i, name))
    return races


def _select_race(races: Dict[str, list], race: Optional[str]) -> str:
    if not races:
        raise BallotFileParseError('no candidate columns')
    elif race is None:
        if len(races) == 1:
            return next(iter(races))
        raise BallotFileParseError(
            'several races in file, choose one of: ' + ', '.join(races)
        )
    elif race not in races:
        raise BallotFileParseError(
            f'unknown race {race!r}, available: ' + ', '.join(races)
        )
    return race


def _parse_score(cell: str) -> Union[int, str, None]:
    cell = cell.strip()
    if not cell:
        return None
    try:
        return int(cell)
    except ValueError:
        return cell
