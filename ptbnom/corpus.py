# License: BSD3

"""
Corpus management
"""
#
# The Wall Street Journal part of the Penn Treebank is organised by
#
# - section (two digits, 00 to 24)
# - file within that section (two digits)
# - tree within that file (position in the file)
#
# We provide a FileId class which is a tuple of the first two. Give
# us a mapping from FileId to filepaths and we do the rest.


class FileId:
    """
    Information needed to uniquely identify a treebank file.

    :param section: section number (eg. 0 for `wsj/00`)
    :type section:  int

    :param fileno: number of the file within its section (eg. 12
        for `wsj_0012.mrg`)
    :type fileno: int

    :param stage: which layer of annotation the file belongs to
        (eg. 'ptb'); for use if the same document is annotated by
        several resources
    :type stage: string
    """
    def __init__(self, section, fileno, stage='ptb'):
        self.section = section
        self.fileno = fileno
        self.stage = stage

    @property
    def doc(self):
        "document name following WSJ conventions, eg. `wsj_0012`"
        return "wsj_%02d%02d" % (self.section, self.fileno)

    def __str__(self):
        return "%s [%s]" % (self.doc, self.stage)

    def __repr__(self):
        return "FileId(%d, %d, %r)" % (self.section, self.fileno, self.stage)

    def _tuple(self):
        """
        For internal use by __hash__, __eq__, etc
        """
        return (self.section, self.fileno, self.stage)

    def __hash__(self):
        return hash(self._tuple())

    def __eq__(self, other):
        return self._tuple() == other._tuple()

    def __lt__(self, other):
        return self._tuple() < other._tuple()

    def mk_global_id(self, local_id):
        """
        String representation of an identifier that should be unique
        to this corpus at least: the document name and the local id
        (typically a tree number)
        """
        return "_".join([self.doc, str(local_id)])


class Reader:
    """
    `Reader` provides little more than dictionaries from `FileId`
    to data.

    :param rootdir: the top directory of the corpus
    :type rootdir: str

    A potentially useful pattern to apply here is to take a slice of
    these dictionaries for processing. For example, you might not want
    to read the whole treebank, but only the sections used for
    training.

    .. code-block:: python

        reader = Reader(corpus_dir)
        files = reader.files()
        subfiles = {k: v for k, v in files.items() if 2 <= k.section <= 21}
        corpus = reader.slurp(subfiles)

    This is an abstract class; you should use the version from a
    data-set, eg. `ptbnom.ptb.corpus.Reader` instead
    """
    def __init__(self, root):
        self.rootdir = root

    def files(self, doc_glob=None):
        """
        Return a dictionary from FileId to filepaths.

        Parameters
        ----------
        doc_glob : str, optional
            Glob expression for file names; if `None`, subclasses are
            expected to use a wildcard that matches all files.
        """
        return {}

    def slurp(self, cfiles=None, doc_glob=None, verbose=False):
        """
        Read the entire corpus if `cfiles` is `None` or else the
        subset specified by `cfiles`.

        Parameters
        ----------
        cfiles : dict, optional
            Dict of files like what `Reader.files()` would return.

        doc_glob : str, optional
            Glob pattern for file names ; ignored if `cfiles`
            is not None.

        verbose : boolean, defaults to False
            If True, print what we're reading to stderr.
        """
        if cfiles is None:
            subcorpus = self.files(doc_glob=doc_glob)
        else:
            subcorpus = cfiles
        return self.slurp_subcorpus(subcorpus, verbose=verbose)

    def slurp_subcorpus(self, cfiles, verbose=False):
        """
        Derived classes should implement this function
        """
        return {}

    def filter(self, d, pred):
        """
        Convenience function equivalent to ::

            { k:v for k,v in d.items() if pred(k) }
        """
        return dict([(k, v) for k, v in d.items() if pred(k)])
