# License: BSD3

"""
NomBank: argument structure annotations of nominal predicates, on
top of the WSJ part of the Penn Treebank

Annotations point into PTB trees (see `ptbnom.ptb`) with expressions
like `4:0*9:1-ARG1-PRD`. Typical use ::

    trees = ptbnom.ptb.Reader(ptb_dir).slurp_trees()
    entries = ptbnom.nombank.load('nombank.1.0', trees)
    examples = ptbnom.nombank.training_entries(entries)
"""

from .annotation import (NULL_LABEL, SUPPORT_LABEL,
                         PointerType, Pointer,
                         NomBankAnnotation, NomBankEntry, FineGrainedEntry)
from .pointer import (PointerResolutionException,
                      parse_pointer_expr, resolve_pointer, resolve_annotation)
from .corpus import (NomBankWarning, NomBankEntryException,
                     parse_tree_path, read_entry, load,
                     support_nodes, fine_grained_entries,
                     select_candidates, training_entries)
