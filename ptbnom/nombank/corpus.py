# License: BSD3

"""
NomBank corpus loading (re-exported by ptbnom.nombank)

NomBank comes as a single text file (`nombank.1.0`) with one
predicate per line ::

    wsj/00/wsj_0012.mrg 4 12 account 03 1:0*12:1-ARG0 2:0,3:0-Support 12:0-rel

that is: the treebank file, the number of the tree within that file,
the position of the predicate among the words of the tree (traces
included), the base form of the predicate, its sense number and the
pointer expressions of its annotations (see `ptbnom.nombank.pointer`).

Lines are resolved against a treebank already in memory, as given by
`ptbnom.ptb.corpus.Reader.slurp_trees`.

The corpus is known to contain a few corrupt lines (eg. line 63292 of
NomBank 1.0 walks 9 steps up from a word that only has 8 ancestors).
These are reported one by one and, unless asked otherwise, the rest
of the corpus loads normally.
"""

import os
import sys
import warnings

from nltk.stem.porter import PorterStemmer

from ptbnom.ptb.annotation import NO_REAL_MEANING_POSTAGS
from ptbnom.ptb.corpus import mk_key
from ptbnom.util import concat_l, ordered_unique
from .annotation import (NULL_LABEL,
                         FineGrainedEntry, NomBankEntry)
from .pointer import PointerResolutionException, resolve_annotation


class NomBankWarning(UserWarning):
    """
    A NomBank line that could not be loaded and was skipped
    """
    pass


class NomBankEntryException(Exception):
    """
    A NomBank line that could not be loaded.

    Whatever is known of the origin of the line is kept around: file
    name and line number (if reading from a file), the raw line, and
    the section, file and tree it points to (`None` where the line
    was too broken to tell). The underlying exception is in `cause`.
    """
    def __init__(self, cause, line,
                 filename=None, lineno=None,
                 section=None, fileno=None, tree_id=None):
        self.cause = cause
        self.line = line
        self.filename = filename
        self.lineno = lineno
        self.section = section
        self.fileno = fileno
        self.tree_id = tree_id
        where = '%s:%s' % (filename or '<lines>',
                           lineno if lineno is not None else '?')
        msg = '%s: %s [%s]' % (where, cause, line.strip())
        super(NomBankEntryException, self).__init__(msg)


# ---------------------------------------------------------------------
# single lines
# ---------------------------------------------------------------------
def parse_tree_path(rel_path):
    """
    Section and file number of a treebank path as given in NomBank,
    eg. `(0, 12)` for `wsj/00/wsj_0012.mrg`
    """
    bname = rel_path.rstrip('/').split('/')[-1]
    key = mk_key(bname)
    if key is None:
        raise ValueError('Not a WSJ treebank file: %s' % rel_path)
    return key.section, key.fileno


def _pick(items, idx, what):
    if not 0 <= idx < len(items):
        raise ValueError('No %s %d (only %d of them)' %
                         (what, idx, len(items)))
    return items[idx]


def read_entry(line, treebank, filename=None, lineno=None):
    """Read a single NomBank line.

    Parameters
    ----------
    line : str
        `path tree_id token_id base_form sense pointer_expr...`
    treebank : dict from (int, int) to list of PtbNode
        Trees of each (section, file) pair; `None` stands for a tree
        the treebank reader could not read.
    filename : str, optional
        For error reporting.
    lineno : int, optional
        For error reporting.

    Returns
    -------
    entry : NomBankEntry

    Raises
    ------
    NomBankEntryException
        If the line is malformed or does not fit the treebank.
    """
    fields = line.split()
    section = fileno = tree_id = None
    try:
        if len(fields) < 6:
            raise ValueError('Expected at least 6 fields, got %d' %
                             len(fields))
        section, fileno = parse_tree_path(fields[0])
        tree_id = int(fields[1])
        token_id = int(fields[2])
        base_form = fields[3]
        sense_id = int(fields[4])
        trees = treebank.get((section, fileno))
        if trees is None:
            raise ValueError('No trees for wsj_%02d%02d in the treebank' %
                             (section, fileno))
        tree = _pick(trees, tree_id, 'tree')
        if tree is None:
            raise ValueError('Tree %d of wsj_%02d%02d could not be read' %
                             (tree_id, section, fileno))
        words = tree.word_nodes()
        predicate = _pick(words, token_id, 'word')
        annotations = tuple(resolve_annotation(tree, expr, words)
                            for expr in fields[5:])
    except (ValueError, PointerResolutionException) as err:
        raise NomBankEntryException(err, line,
                                    filename=filename, lineno=lineno,
                                    section=section, fileno=fileno,
                                    tree_id=tree_id)
    return NomBankEntry(section=section,
                        fileno=fileno,
                        tree_id=tree_id,
                        token_id=token_id,
                        predicate_node=predicate,
                        stemmed_predicate=base_form,
                        sense_id=sense_id,
                        annotations=annotations,
                        tree=tree)


# ---------------------------------------------------------------------
# whole corpus
# ---------------------------------------------------------------------
def _read_lines(lines, treebank, filename, strict, verbose, errors):
    entries = []
    skipped = 0
    lineno = 0
    for lineno, line in enumerate(lines, 1):
        if not line.strip():
            continue
        if verbose and lineno % 1000 == 0:
            sys.stderr.write("\rLoading NomBank [%d lines, %d skipped]" %
                             (lineno, skipped))
        try:
            entries.append(read_entry(line, treebank,
                                      filename=filename, lineno=lineno))
        except NomBankEntryException as err:
            if strict:
                raise
            skipped += 1
            warnings.warn(str(err), NomBankWarning)
            if errors is not None:
                errors.append(err)
    if verbose:
        sys.stderr.write("\rLoading NomBank [%d lines, %d skipped done]\n" %
                         (lineno, skipped))
    return entries


def load(path_or_lines, treebank, strict=False, verbose=False,
         errors=None):
    """Read all the entries of a NomBank file.

    Parameters
    ----------
    path_or_lines : str, os.PathLike or iterable of str
        Path to the NomBank file (eg. `nombank.1.0`), or its lines.
    treebank : dict from (int, int) to list of PtbNode
        See `ptbnom.ptb.corpus.Reader.slurp_trees`.
    strict : bool, optional
        Raise on the first bad line instead of skipping it with a
        `NomBankWarning`.
    verbose : bool, optional
        Report progress on stderr.
    errors : list, optional
        If given, the `NomBankEntryException` of each skipped line is
        appended to it.

    Returns
    -------
    entries : list of NomBankEntry
        In file order.
    """
    if isinstance(path_or_lines, (str, os.PathLike)):
        filename = os.fspath(path_or_lines)
        with open(filename, encoding='utf-8') as stream:
            return _read_lines(stream, treebank, filename,
                               strict, verbose, errors)
    return _read_lines(path_or_lines, treebank, None,
                       strict, verbose, errors)


# ---------------------------------------------------------------------
# fine grained entries
# ---------------------------------------------------------------------
def support_nodes(entry):
    """
    Support verb nodes of an entry (first node of each `Support`
    annotation)
    """
    return tuple(ordered_unique(anno.nodes[0] for anno in entry.annotations
                                if anno.is_support()))


def _mk_fine_grained(entry, node, supports, label, function_tags):
    return FineGrainedEntry(section=entry.section,
                            fileno=entry.fileno,
                            tree_id=entry.tree_id,
                            predicate_node=entry.predicate_node,
                            stemmed_predicate=entry.stemmed_predicate,
                            sense_id=entry.sense_id,
                            node=node,
                            support_nodes=supports,
                            label=label,
                            function_tags=function_tags,
                            tree=entry.tree)


def _positives(entry, supports):
    return [_mk_fine_grained(entry, node, supports,
                             anno.label, anno.function_tags)
            for anno in entry.annotations
            for node in anno.nodes]


def fine_grained_entries(entries):
    """
    Break entries down into one `FineGrainedEntry` per annotated node:
    (predicate, ARG0 node), (predicate, ARG1 node), ...,
    (predicate, support verb node).

    There are no negative examples in here, see `training_entries`
    for that
    """
    return concat_l(_positives(e, support_nodes(e)) for e in entries)


def select_candidates(tree, predicate_node, supports):
    """
    Nodes of a tree which could in principle be an argument of the
    predicate: all of them except those with no real meaning
    (punctuation, brackets, conjunctions, null elements), the
    ancestors of the predicate and the support verb nodes

    Returns
    -------
    candidates : set of PtbNode
    """
    excluded = set(predicate_node.ancestors())
    excluded.update(supports)
    return set(n for n in tree.nodes()
               if n.syntactic_category not in NO_REAL_MEANING_POSTAGS
               and n not in excluded)


def training_entries(entries, deverbal_nouns=None, stemmer=None):
    """Positive and negative examples for argument identification.

    For each entry, every annotated node gives a positive example
    (as in `fine_grained_entries`) and every other candidate node
    (see `select_candidates`) a negative one, labelled `NULL_LABEL`.

    Parameters
    ----------
    entries : iterable of NomBankEntry

    deverbal_nouns : iterable of str, optional
        If given, only keep the entries whose predicate has the same
        stem as one of these nouns.

    stemmer : object with a `stem` method, optional
        Stemmer for the above (default: NLTK's `PorterStemmer`).

    Returns
    -------
    examples : list of FineGrainedEntry
        For each entry, positives in annotation order, then negatives
        in tree order.
    """
    if deverbal_nouns is not None:
        stemmer = stemmer or PorterStemmer()
        stems = frozenset(stemmer.stem(noun) for noun in deverbal_nouns)
        entries = [e for e in entries
                   if stemmer.stem(e.predicate_node.content) in stems]

    res = []
    for entry in entries:
        supports = support_nodes(entry)
        candidates = select_candidates(entry.tree, entry.predicate_node,
                                       supports)
        positives = _positives(entry, supports)
        candidates.difference_update(fge.node for fge in positives)
        res.extend(positives)
        res.extend(_mk_fine_grained(entry, node, supports, NULL_LABEL, ())
                   for node in entry.tree.nodes() if node in candidates)
    return res
