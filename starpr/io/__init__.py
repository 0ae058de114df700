"""Input of ballots from election data files.

This subpackage is structured into modules by file format. Loaders return
an :class:`core.ElectionData` object whose candidates and votes can be
passed straight to an evaluator.
"""
