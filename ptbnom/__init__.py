"""
The ptbnom library provides utilities for working with Penn Treebank
parse trees and the NomBank annotations that sit on top of them.

It has a two-layer structure:

* tree layer (`ptbnom.ptb`): a node model for bracketed parse trees,
  traversal helpers, production rules and head finding (syntactic heads
  after Collins, semantic heads after Gerber)

* annotation layer (`ptbnom.nombank`): the pointer micro-syntax NomBank
  uses to refer to tree nodes (`4:0*9:1-ARG1-PRD`), its resolution against
  a particular tree, and corpus loading on top of a treebank reader

Corpus slicing (`ptbnom.corpus`) follows the same conventions for both
layers: a `FileId` for each treebank file and a `Reader` giving
dictionaries from `FileId` to data ::

                nombank                    [annotation layer]
                   |
          +--------+--------+
          |                 |
          v                 v
     ptb.corpus  ->  ptb.tree <- ptb.head_finder     [tree layer]
          |
          v
        corpus

Trees are built once and frozen before being handed out; everything
above the tree layer only reads them.
"""
