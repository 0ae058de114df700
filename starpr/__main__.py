"""A commandline tool for quick evaluation of Allocated Score elections.

Reads ballots exported in the CSV ballot data format, elects the given
number of winners and shows the round-by-round weighted scores.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import List, Optional

import starpr.io.ballots
from starpr.evaluate.allocated import AllocatedScore, Results
from starpr.io.core import ElectionData

argparser = argparse.ArgumentParser(
    prog='starpr',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf-8-sig'),
    help='file to load input ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load input ballots from standard input',
)
argparser.add_argument(
    '-r', '--race',
    help='title of the race to evaluate, if the file contains several',
)
argparser.add_argument(
    '-n', '--n-seats',
    type=int,
    default=1,
    help='number of winners to elect',
)
argparser.add_argument(
    '-d', '--deterministic',
    action='store_true',
    help=(
        'break ties in favor of the candidate listed first instead of'
        ' at random'
    ),
)
argparser.add_argument(
    '-5', '--five-star',
    action='store_true',
    help='break ties by the number of five-star scores first',
)
argparser.add_argument(
    '-S', '--seed',
    type=int,
    help='seed for random tie-breaking',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         race: Optional[str] = None,
         n_seats: int = 1,
         deterministic: bool = False,
         five_star: bool = False,
         seed: Optional[int] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> Optional[Results]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    election = starpr.io.ballots.load(input_file, race=race)
    if not election.votes:
        warnings.warn('empty ballots: cannot evaluate election, terminating')
        return None
    evaluator = AllocatedScore(
        break_ties_randomly=not deterministic,
        enable_five_star_tiebreaker=five_star,
        seed=seed,
    )
    print()
    print(f'Running an Allocated Score election: {election.election_name}')
    print(f'Received {len(election.votes)} ballots')
    print(f'Electing {n_seats} of {len(election.candidates)} candidates')
    print()
    print('Evaluating the election...')
    results = evaluator.evaluate(election.candidates, election.votes, n_seats)
    print()
    show_vote_counts(results)
    print()
    print('Election result:')
    show_elected(results)
    print()
    show_rounds(election, results)
    return results


def show_vote_counts(results: Results) -> None:
    summary = results.summary_data
    print(f'{summary.n_valid_votes} valid ballots'
          f' ({summary.n_bullet_votes} bullet votes)')
    print(f'{summary.n_invalid_votes} invalid ballots')
    print(f'{summary.n_under_votes} undervotes')


def show_elected(results: Results) -> None:
    """Show the elected candidates in the order of election."""
    left_col = [str(i) for i in range(1, len(results.elected) + 1)]
    n_just_chars = len(max(left_col, key=len))
    for left, cand, ties in zip(left_col, results.elected, results.tied):
        note = ''
        if ties:
            note = '  (tie broken among ' + ', '.join(map(str, ties)) + ')'
        print(left.rjust(n_just_chars), ' ', cand, note, sep='')
    if results.other:
        print('Not elected:', ', '.join(map(str, results.other)))


def show_rounds(election: ElectionData, results: Results) -> None:
    """Show weighted score sums of all candidates in each round."""
    names: List[str] = election.candidates
    name_width = max(len(name) for name in names)
    by_round = results.summary_data.weighted_scores_by_round
    print(' ' * name_width, *(
        f'{"R" + str(i + 1):>9}' for i in range(len(by_round))
    ))
    for cand_i, name in enumerate(names):
        print(name.ljust(name_width), *(
            f'{row[cand_i]:9.2f}' for row in by_round
        ))


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
