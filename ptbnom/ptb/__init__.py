# License: BSD3
# pylint: disable=W0401

"""
Conventions specific to the Penn Treebank: the node model for parse
trees, head finding, and reading the WSJ part of the treebank.

The PTB isn't an argument structure resource as such, but the trees
every NomBank annotation points into (see `ptbnom.nombank`)
"""

from .annotation import *
from .tree import PtbNode, PtbStructureException, Rule
from .head_finder import (COLLINS, GERBER,
                          SyntacticHeadFinder, SemanticHeadFinder)
from .corpus import PtbWarning, Reader
