# License: BSD3

"""
PTB corpus management (re-exported by ptbnom.ptb)

Reads the `parsed/mrg/wsj` part of the Penn Treebank into
`ptbnom.ptb.tree.PtbNode` trees.
"""

from glob import glob
import os
import re
import sys
import warnings

# pylint: disable=no-name-in-module
# pylint squawks about import error, but this seems to
# be some sort of fancy lazily loaded module which it's
# maybe a bit confused by
from nltk.corpus.reader import BracketParseCorpusReader
# pylint: enable=no-name-in-module

from ptbnom.corpus import FileId
import ptbnom.corpus
from .tree import PtbNode, PtbStructureException


_MRG_RE = re.compile(r'^wsj_(?P<section>\d\d)(?P<fileno>\d\d)\.mrg$')


class PtbWarning(UserWarning):
    """
    A treebank tree that could not be read and was left out
    """
    pass


# ---------------------------------------------------------------------
# Corpus
# ---------------------------------------------------------------------
class Reader(ptbnom.corpus.Reader):
    """
    See `ptbnom.corpus.Reader` for details.

    Note that the WSJ section 00 starts with `wsj_0001.mrg`. Trees are
    looked up by `FileId` rather than by position, so a missing
    `wsj_0000.mrg` is simply absent from the result and no
    placeholder file is needed.
    """
    def __init__(self, corpusdir):
        ptbnom.corpus.Reader.__init__(self, corpusdir)

    def files(self, doc_glob=None):
        """
        Parameters
        ----------
        doc_glob : str, optional
            Glob expression for the files, relative to the corpus
            dir; if `None`, it uses '*/wsj_*.mrg' (all sections).

        Returns
        -------
        files : dict from FileId to str
            Path of each file, relative to the corpus dir.
        """
        if doc_glob is None:
            doc_glob = os.path.join('*', 'wsj_*.mrg')
        mrg_files = {}
        full_glob = os.path.join(self.rootdir, doc_glob)
        for fname in glob(full_glob):
            k = mk_key(os.path.basename(fname))
            if k is None:
                continue
            mrg_files[k] = os.path.relpath(fname, self.rootdir)
        return mrg_files

    def slurp_subcorpus(self, cfiles, verbose=False):
        """
        Return a dictionary from FileId to the list of (frozen)
        trees of each file, in file order.

        A tree that cannot be read (eg. unbalanced brackets) is
        reported with a `PtbWarning` and replaced by `None`, so that
        tree numbers within a file stay as in the treebank
        """
        ptb = BracketParseCorpusReader(self.rootdir,
                                       list(cfiles.values()),
                                       encoding='ascii')
        corpus = {}
        counter = 0
        for k in sorted(cfiles):
            if verbose:
                sys.stderr.write("\rSlurping treebank [%d/%d]" %
                                 (counter, len(cfiles)))
            corpus[k] = [_read_tree(tree, k, i) for i, tree in
                         enumerate(ptb.parsed_sents(cfiles[k]))]
            counter = counter+1
        if verbose:
            sys.stderr.write("\rSlurping treebank [%d/%d done]\n" %
                             (counter, len(cfiles)))
        return corpus

    def slurp_trees(self, cfiles=None, verbose=False):
        """
        Same as `slurp` but keyed on (section, fileno) pairs, which is
        how NomBank refers to treebank files (see
        `ptbnom.nombank.corpus.load`)
        """
        corpus = self.slurp(cfiles=cfiles, verbose=verbose)
        return dict(((k.section, k.fileno), trees)
                    for k, trees in corpus.items())


def _read_tree(tree, key, tree_id):
    "Frozen tree, or None with a warning if it is malformed"
    try:
        return PtbNode.from_nltk(tree)
    except PtbStructureException as err:
        warnings.warn('%s tree %d left out: %s' % (key.doc, tree_id, err),
                      PtbWarning)
        return None


def mk_key(bname):
    """
    Return a corpus key for a file name such as `wsj_0012.mrg`
    (None if the name does not follow WSJ conventions)
    """
    match = _MRG_RE.match(bname)
    if match is None:
        return None
    return FileId(section=int(match.group('section')),
                  fileno=int(match.group('fileno')))
