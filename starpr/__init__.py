"""starpr - evaluation of Allocated Score (STAR-PR) elections.

Allocated Score is a proportional multi-winner voting method for score
ballots (0 to 5 stars per candidate). It elects winners one round at a
time and spends a quota of ballot weight on each of them, so that every
winner represents a comparable share of the electorate.

The package is split into the following parts:

-   The ``vote`` module defines the ballot format, vote errors and the
    ballot validators that sort raw ballots into valid, invalid and
    undervoted ones.
-   The ``summary`` module computes aggregate ballot statistics (totals,
    score histograms, pairwise preferences) and reorders them for display.
-   The ``evaluate`` subpackage contains the Allocated Score evaluator that
    determines the winners and records round-by-round telemetry.
-   The ``component`` subpackage holds exchangeable parts of the evaluator:
    quota functions, score normalization and tie-breakers.
-   The ``io`` subpackage reads ballots from exported ballot files.
"""

__version__ = '0.1.0'
