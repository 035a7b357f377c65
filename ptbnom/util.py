# License: BSD3

"""
Miscellaneous utility functions
"""

from itertools import chain


def concat(items):
    ":: Iterable (Iterable a) -> Iterable a"
    return chain.from_iterable(items)


def concat_l(items):
    ":: [[a]] -> [a]"
    return list(chain.from_iterable(items))


def ordered_unique(items):
    """
    Remove duplicates from a sequence while keeping the first
    occurrence of each item in place (items are compared by
    identity-friendly hashing, so this is safe on tree nodes)
    """
    seen = set()
    res = []
    for item in items:
        if item not in seen:
            seen.add(item)
            res.append(item)
    return res
