'''Evaluate the results of Allocated Score elections.

The :class:`allocated.AllocatedScore` evaluator elects winners one round at
a time. Each round elects the candidate with the highest score sum weighted
by the remaining ballot weights, then spends a quota of weight from the
ballots that supported the winner most strongly.

The evaluator delegates ballot validation to a validator from the
:mod:`starpr.vote` module and returns the winners together with the summary
data of the election, including round-by-round telemetry for auditing.
'''

from starpr.evaluate.core import *    # noqa
