'''Building blocks of the Allocated Score evaluator.

Quota functions, score normalization and round tie-breakers are kept
here so that they can be swapped or referenced by name from the
evaluator configuration.
'''
