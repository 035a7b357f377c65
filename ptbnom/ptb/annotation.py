"""
Conventions of the Penn Treebank annotation scheme.

Node labels in the PTB bundle a basic syntactic category with function
tags and co-indexing (eg. `NP-SBJ-1`, `S-TPC=2`), and a few tags stand for
things other than words: the empty category `-NONE-` used for traces,
and punctuation or bracket tags. The helpers here keep that knowledge in
one place so that the tree and annotation layers do not have to.
"""

# License: CeCILL-B (French BSD3-like)

import re


NULL_ELEMENT = '-NONE-'
"""
Part of speech tag of empty categories (traces, null complementizers...)
"""


# part of speech tags of punctuation
PUNC_POSTAGS = frozenset([
    '``', "''",  # double quotes
    ',',
    ':',
    '.',  # strong punctuations
])

BRACKET_POSTAGS = frozenset([
    '-LRB-', '-RRB-',
    '-LSB-', '-RSB-',
    '-LCB-', '-RCB-',
])

NO_REAL_MEANING_POSTAGS = (PUNC_POSTAGS | BRACKET_POSTAGS |
                           frozenset(['CC', NULL_ELEMENT]))
"""
Categories of nodes that can never be an argument of a predicate on
their own: punctuation, brackets, coordinating conjunctions and empty
categories
"""


#
# TreebankLanguagePack (after edu.stanford.nlp.trees)
#

# label annotation introducing characters
_LAIC = [
    '-',  # function tags, identity index, reference index
    '=',  # gap co-indexing
]

_LAIC_RE = re.compile(r'[-=]')


# pylint: disable=invalid-name
def post_basic_category_index(label):
    """Get the index of the first char after the basic label.

    This should never match the first char of the label ;
    if the first char is such a char, then a matched char is also
    not used iff there is something in between, e.g.
    (-LRB- => -LRB-) but (--PU => -).
    """
    first_char = ''
    for i, c in enumerate(label):
        if c in _LAIC:
            if i == 0:
                first_char = c
            elif first_char and (i > 1) and (c == first_char):
                first_char = ''
            else:
                break
    else:
        i += 1
    return i
# pylint: enable=invalid-name


def basic_category(label):
    """Get the basic syntactic category of a label.

    This is done by truncating whatever comes after a
    (non-word-initial) occurrence of one of the
    label_annotation_introducing_characters().
    """
    return label[0:post_basic_category_index(label)] if label else label


def split_label(label):
    """Split a PTB node label into its basic category and the
    annotations that follow it.

    Parameters
    ----------
    label: str
        Label as found in the treebank, eg. `NP-SBJ-1`.

    Returns
    -------
    category: str
        Basic category, eg. `NP`.

    extras: tuple of str
        Function tags and indices in order, eg. `('SBJ', '1')`.
        Gap co-indexing keeps its `=` marker (`S=2` gives `('=2',)`)
        so that it cannot be confused with an identity index.
    """
    if not label:
        return label, ()
    idx = post_basic_category_index(label)
    category = label[:idx]
    rest = label[idx:]
    extras = []
    start = 0
    for match in _LAIC_RE.finditer(rest):
        if match.start() > start:
            extras.append(rest[start:match.start()])
        start = match.start() + (1 if match.group() == '-' else 0)
    if start < len(rest):
        extras.append(rest[start:])
    return category, tuple(x for x in extras if x and x != '=')
