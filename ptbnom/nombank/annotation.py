# License: BSD3

# disable "pointless string" warning because we want attribute docstrings
# pylint: disable=W0105

"""
Educe-style records for NomBank annotations.

A NomBank line marks one nominal predicate in one PTB tree together with
its arguments. Each argument is given as a pointer expression, eg.
`4:0*9:1-ARG1-PRD`, which the `ptbnom.nombank.pointer` module resolves
into the tree nodes it designates. All the records here are immutable
and only ever point into (frozen) trees.
"""

from collections import namedtuple
from enum import Enum


SUPPORT_LABEL = 'Support'
"label of support verb annotations"

NULL_LABEL = 'NULL'
"label of negative training examples"


class PointerType(Enum):
    """
    How the pointers of one annotation relate to each other

       * single: one pointer
       * coreference: `*`-joined pointers, all referring to the same
         argument
       * not a constituent: `,`-joined pointers, the argument is
         split over several non-adjacent constituents
    """
    SINGLE = 'single'
    COREFERENCE = 'coreference'
    NOT_A_CONSTITUENT = 'not-a-constituent'


class Pointer(namedtuple('Pointer', ['token', 'steps'])):
    """
    A `TOKEN:STEPS` pair: the index of a word of the tree (traces
    included) and the number of parent links to follow from it
    """
    def __str__(self):
        return '%d:%d' % (self.token, self.steps)


class NomBankAnnotation(namedtuple('NomBankAnnotation',
                                   ['nodes',
                                    'pointer_type',
                                    'label',
                                    'function_tags'])):
    """
    One argument (or the predicate itself, or a support verb) of a
    NomBank entry: the tuple of nodes it points to, a `PointerType`, a
    role label (eg. `ARG1`) and a tuple of function tags (eg. `PRD`)
    """
    def is_support(self):
        "True for support verb annotations"
        return self.label == SUPPORT_LABEL


class NomBankEntry(namedtuple('NomBankEntry',
                              ['section',
                               'fileno',
                               'tree_id',
                               'token_id',
                               'predicate_node',
                               'stemmed_predicate',
                               'sense_id',
                               'annotations',
                               'tree'])):
    """
    One line of NomBank: where it comes from in the treebank
    (section, file, tree number), the position of the predicate among
    the words of the tree and its node, the base form NomBank gives
    for it, its sense number and all its annotations (tuple of
    `NomBankAnnotation`)
    """
    def identifier(self):
        """
        A global identifier for the predicate of this entry
        """
        return 'wsj_%02d%02d_%d_%d' % (self.section, self.fileno,
                                        self.tree_id, self.token_id)


class FineGrainedEntry(namedtuple('FineGrainedEntry',
                                  ['section',
                                   'fileno',
                                   'tree_id',
                                   'predicate_node',
                                   'stemmed_predicate',
                                   'sense_id',
                                   'node',
                                   'support_nodes',
                                   'label',
                                   'function_tags',
                                   'tree'])):
    """
    A single (predicate, node, label) triple taken out of a
    `NomBankEntry`, together with the support verb nodes of the
    predicate. Negative examples have the label `NULL_LABEL`.
    """
    def is_negative(self):
        "True for nodes which are no argument of the predicate"
        return self.label == NULL_LABEL
