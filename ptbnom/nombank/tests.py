# License: BSD3

# pylint: disable=R0904

"""
Tests for ptbnom.nombank
"""

from collections import Counter
import os
from pathlib import Path
import shutil
import tempfile
import unittest
import warnings

from ptbnom.ptb.tree import PtbNode
from .annotation import (NULL_LABEL, NomBankAnnotation, Pointer,
                         PointerType)
from .corpus import (NomBankEntryException, NomBankWarning,
                     fine_grained_entries, load, parse_tree_path,
                     read_entry, select_candidates, support_nodes,
                     training_entries)
from .diagnostics import (count_labels, count_pointer_types, count_table,
                          summary)
from .pointer import (PointerResolutionException, parse_pointer_expr,
                      resolve_annotation, resolve_pointer)


# ---------------------------------------------------------------------
# example data
# ---------------------------------------------------------------------

# words: 0 The, 1 company, 2 's, 3 decision, 4 was, 5 a, 6 surprise,
#        7 to, 8 investors, 9 and, 10 analysts, 11 .
TSTR_SURPRISE = """
( (S (NP-SBJ (NP (DT The) (NN company) (POS 's))
             (NN decision))
     (VP (VBD was)
         (NP-PRD (NP (DT a) (NN surprise))
                 (PP (TO to)
                     (NP (NNS investors) (CC and) (NNS analysts)))))
     (. .)) )
"""

LINE_SURPRISE = ("wsj/00/wsj_0001.mrg 0 6 surprise 01 "
                 "6:0-rel 0:2-ARG0 4:0-Support 7:1-ARG1")

# 0:9 walks past the root
LINE_TOO_HIGH = "wsj/00/wsj_0001.mrg 0 6 surprise 01 6:0-rel 0:9-ARG0"

LINE_NO_FILE = "wsj/00/wsj_0002.mrg 0 6 surprise 01 6:0-rel"

LINE_GARBAGE = "this is not a nombank line"


def _treebank():
    return {(0, 1): [PtbNode.from_string(TSTR_SURPRISE)]}


class PointerParseTest(unittest.TestCase):
    """Pointer expression syntax"""

    def test_single(self):
        ptype, ptrs, label, tags = parse_pointer_expr('7:1-ARG1')
        self.assertEqual(PointerType.SINGLE, ptype)
        self.assertEqual([Pointer(7, 1)], ptrs)
        self.assertEqual('ARG1', label)
        self.assertEqual((), tags)

    def test_coreference(self):
        ptype, ptrs, label, tags = parse_pointer_expr('4:0*9:1-ARG1-PRD')
        self.assertEqual(PointerType.COREFERENCE, ptype)
        self.assertEqual([Pointer(4, 0), Pointer(9, 1)], ptrs)
        self.assertEqual('ARG1', label)
        self.assertEqual(('PRD',), tags)

    def test_not_a_constituent(self):
        ptype, ptrs, label, tags = parse_pointer_expr('2:0,3:0-Support')
        self.assertEqual(PointerType.NOT_A_CONSTITUENT, ptype)
        self.assertEqual([Pointer(2, 0), Pointer(3, 0)], ptrs)
        self.assertEqual('Support', label)
        self.assertEqual((), tags)

    def test_mixed_is_coreference(self):
        ptype, ptrs, _, _ = parse_pointer_expr('1:0,2:0*13:2-ARG0')
        self.assertEqual(PointerType.COREFERENCE, ptype)
        self.assertEqual([Pointer(1, 0), Pointer(2, 0), Pointer(13, 2)],
                         ptrs)

    def test_several_tags(self):
        _, _, label, tags = parse_pointer_expr('12:1-ARGM-TMP-H1')
        self.assertEqual('ARGM', label)
        self.assertEqual(('TMP', 'H1'), tags)

    def test_multidigit(self):
        _, ptrs, _, _ = parse_pointer_expr('123:45-ARG0')
        self.assertEqual([Pointer(123, 45)], ptrs)
        self.assertEqual('123:45', str(ptrs[0]))

    def test_malformed(self):
        for expr in ['',
                     '4:0',
                     '4-ARG1',
                     ':0-ARG1',
                     'a:0-ARG1',
                     '4:0*-ARG1',
                     '4:0--ARG1',
                     '4:0;5:0-ARG1',
                     '4:0-ARG1-']:
            with self.assertRaises(PointerResolutionException) as cm:
                parse_pointer_expr(expr)
            self.assertEqual(expr, cm.exception.expr)


class PointerResolveTest(unittest.TestCase):
    """Resolving pointer expressions against a tree"""

    def setUp(self):
        self.tree = PtbNode.from_string(TSTR_SURPRISE)
        self.words = self.tree.word_nodes()

    def test_coreference(self):
        anno = resolve_annotation(self.tree, '4:0*9:0-ARG1-PRD')
        self.assertEqual(PointerType.COREFERENCE, anno.pointer_type)
        self.assertEqual('ARG1', anno.label)
        self.assertEqual(('PRD',), anno.function_tags)
        self.assertEqual(2, len(anno.nodes))
        self.assertIs(self.words[4], anno.nodes[0])
        self.assertIs(self.words[9], anno.nodes[1])

    def test_not_a_constituent(self):
        anno = resolve_annotation(self.tree, '2:0,3:0-Support')
        self.assertEqual(PointerType.NOT_A_CONSTITUENT, anno.pointer_type)
        self.assertEqual('Support', anno.label)
        self.assertEqual((), anno.function_tags)
        self.assertIs(self.words[2], anno.nodes[0])
        self.assertIs(self.words[3], anno.nodes[1])
        self.assertTrue(anno.is_support())

    def test_steps(self):
        anno = resolve_annotation(self.tree, '9:1-ARG1')
        node = anno.nodes[0]
        self.assertEqual('NP', node.content)
        self.assertEqual(['investors', 'and', 'analysts'], node.words())
        root = resolve_annotation(self.tree, '0:3-ARG0').nodes[0]
        self.assertIs(self.tree, root)

    def test_token_out_of_range(self):
        self.assertRaises(PointerResolutionException,
                          resolve_annotation, self.tree, '12:0-ARG1')
        self.assertRaises(PointerResolutionException,
                          resolve_pointer, self.words, Pointer(-1, 0))

    def test_too_many_steps(self):
        with self.assertRaises(PointerResolutionException) as cm:
            resolve_annotation(self.tree, '0:4-ARG0')
        self.assertEqual('0:4-ARG0', cm.exception.expr)

    def test_idempotent(self):
        expr = '0:2*4:0,7:1-ARG0'
        anno1 = resolve_annotation(self.tree, expr)
        anno2 = resolve_annotation(self.tree, expr, self.words)
        self.assertEqual(anno1, anno2)
        self.assertEqual(NomBankAnnotation(anno1.nodes,
                                           PointerType.COREFERENCE,
                                           'ARG0', ()),
                         anno2)


class EntryTest(unittest.TestCase):
    """Reading single NomBank lines"""

    def setUp(self):
        self.treebank = _treebank()
        self.tree = self.treebank[(0, 1)][0]
        self.words = self.tree.word_nodes()

    def test_parse_tree_path(self):
        self.assertEqual((0, 12), parse_tree_path('wsj/00/wsj_0012.mrg'))
        self.assertEqual((23, 1), parse_tree_path('wsj/23/wsj_2301.mrg'))
        self.assertRaises(ValueError, parse_tree_path, 'wsj/00/foo.mrg')

    def test_read_entry(self):
        entry = read_entry(LINE_SURPRISE, self.treebank)
        self.assertEqual((0, 1, 0), (entry.section, entry.fileno,
                                     entry.tree_id))
        self.assertEqual(6, entry.token_id)
        self.assertEqual(1, entry.sense_id)
        self.assertEqual('surprise', entry.stemmed_predicate)
        self.assertIs(self.words[6], entry.predicate_node)
        self.assertIs(self.tree, entry.tree)
        self.assertEqual(['rel', 'ARG0', 'Support', 'ARG1'],
                         [a.label for a in entry.annotations])
        self.assertEqual('wsj_0001_0_6', entry.identifier())
        arg0 = entry.annotations[1].nodes[0]
        self.assertEqual(('NP', ('SBJ',)), (arg0.content, arg0.labels))

    def test_bad_lines(self):
        with self.assertRaises(NomBankEntryException) as cm:
            read_entry(LINE_TOO_HIGH, self.treebank,
                       filename='nombank.1.0', lineno=63292)
        err = cm.exception
        self.assertIsInstance(err.cause, PointerResolutionException)
        self.assertEqual((0, 1, 0), (err.section, err.fileno, err.tree_id))
        self.assertEqual(63292, err.lineno)
        self.assertIn('nombank.1.0:63292', str(err))

        with self.assertRaises(NomBankEntryException) as cm:
            read_entry(LINE_NO_FILE, self.treebank)
        self.assertEqual((0, 2), (cm.exception.section,
                                  cm.exception.fileno))

        with self.assertRaises(NomBankEntryException) as cm:
            read_entry(LINE_GARBAGE, self.treebank)
        self.assertIsNone(cm.exception.section)

        bad_tree = LINE_SURPRISE.replace(' 0 6 ', ' 3 6 ')
        self.assertRaises(NomBankEntryException,
                          read_entry, bad_tree, self.treebank)
        bad_token = LINE_SURPRISE.replace(' 0 6 ', ' 0 40 ')
        self.assertRaises(NomBankEntryException,
                          read_entry, bad_token, self.treebank)

    def test_unreadable_tree(self):
        # the treebank reader leaves None for trees it could not read
        treebank = {(0, 1): [None, self.tree]}
        with self.assertRaises(NomBankEntryException) as cm:
            read_entry(LINE_SURPRISE, treebank, lineno=3)
        err = cm.exception
        self.assertIsInstance(err.cause, ValueError)
        self.assertEqual((0, 1, 0), (err.section, err.fileno, err.tree_id))
        self.assertIn('could not be read', str(err))
        moved = LINE_SURPRISE.replace(' 0 6 ', ' 1 6 ')
        self.assertIs(self.tree, read_entry(moved, treebank).tree)


class LoadTest(unittest.TestCase):
    """Loading a whole corpus"""

    def setUp(self):
        self.treebank = _treebank()
        self.lines = [LINE_SURPRISE, LINE_TOO_HIGH, '',
                      LINE_NO_FILE, LINE_GARBAGE, LINE_SURPRISE]
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_skip_bad_lines(self):
        errors = []
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            entries = load(self.lines, self.treebank, errors=errors)
        self.assertEqual(2, len(entries))
        self.assertEqual([2, 4, 5], [e.lineno for e in errors])
        nb_warnings = [w for w in caught
                       if issubclass(w.category, NomBankWarning)]
        self.assertEqual(3, len(nb_warnings))

    def test_strict(self):
        with self.assertRaises(NomBankEntryException) as cm:
            load(self.lines, self.treebank, strict=True)
        self.assertEqual(2, cm.exception.lineno)

    def test_load_file(self):
        path = os.path.join(self.tmpdir, 'nombank.1.0')
        with open(path, 'w') as stream:
            stream.write('\n'.join(self.lines) + '\n')
        errors = []
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', NomBankWarning)
            entries = load(path, self.treebank, errors=errors)
        self.assertEqual(2, len(entries))
        self.assertEqual(path, errors[0].filename)

    def test_load_path_object(self):
        path = Path(self.tmpdir) / 'nombank.1.0'
        with open(str(path), 'w') as stream:
            stream.write(LINE_SURPRISE + '\n' + LINE_GARBAGE + '\n')
        errors = []
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', NomBankWarning)
            entries = load(path, self.treebank, errors=errors)
        self.assertEqual(1, len(entries))
        self.assertEqual(str(path), errors[0].filename)


class FineGrainedTest(unittest.TestCase):
    """Fine grained entries, candidates and training examples"""

    def setUp(self):
        self.entry = read_entry(LINE_SURPRISE, _treebank())
        self.tree = self.entry.tree
        self.words = self.tree.word_nodes()
        self.np_sbj = self.words[0].parent.parent
        self.pp = self.words[7].parent

    def test_support_nodes(self):
        self.assertEqual((self.words[4],), support_nodes(self.entry))

    def test_fine_grained(self):
        fges = fine_grained_entries([self.entry, self.entry])
        self.assertEqual(8, len(fges))
        self.assertEqual([self.words[6], self.np_sbj, self.words[4],
                          self.pp],
                         [x.node for x in fges[:4]])
        for fge in fges:
            self.assertEqual((self.words[4],), fge.support_nodes)
            self.assertIs(self.words[6], fge.predicate_node)
            self.assertFalse(fge.is_negative())

    def test_candidates(self):
        predicate = self.entry.predicate_node
        supports = support_nodes(self.entry)
        candidates = select_candidates(self.tree, predicate, supports)
        for anc in predicate.ancestors():
            self.assertNotIn(anc, candidates)
        for node in supports:
            self.assertNotIn(node, candidates)
        self.assertNotIn(self.words[9], candidates)  # and
        self.assertNotIn(self.words[11], candidates)  # .
        self.assertIn(predicate, candidates)
        self.assertIn(self.np_sbj, candidates)
        self.assertEqual(13, len(candidates))

    def test_candidates_random_selection(self):
        nodes = list(self.tree.nodes())
        for predicate in self.words:
            for support in nodes[::3]:
                candidates = select_candidates(self.tree, predicate,
                                               [support])
                self.assertNotIn(support, candidates)
                self.assertFalse(candidates & set(predicate.ancestors()))

    def test_training(self):
        examples = training_entries([self.entry])
        positives = [x for x in examples if not x.is_negative()]
        negatives = [x for x in examples if x.is_negative()]
        self.assertEqual(4, len(positives))
        self.assertEqual(10, len(negatives))
        self.assertEqual(examples[:4], positives)
        pos_nodes = set(x.node for x in positives)
        for neg in negatives:
            self.assertNotIn(neg.node, pos_nodes)
            self.assertEqual(NULL_LABEL, neg.label)
            self.assertEqual((), neg.function_tags)
        # negatives in tree order
        order = list(self.tree.nodes())
        idx = [order.index(x.node) for x in negatives]
        self.assertEqual(sorted(idx), idx)

    def test_deverbal_filter(self):
        self.assertEqual(14, len(training_entries([self.entry],
                                                  ['surprises'])))
        self.assertEqual([], training_entries([self.entry], ['decision']))


class DiagnosticsTest(unittest.TestCase):
    """Counts over entries"""

    def setUp(self):
        self.entries = [read_entry(LINE_SURPRISE, _treebank())]

    def test_counts(self):
        self.assertEqual(Counter({'rel': 1, 'ARG0': 1,
                                  'Support': 1, 'ARG1': 1}),
                         count_labels(self.entries))
        self.assertEqual(Counter({PointerType.SINGLE: 4}),
                         count_pointer_types(self.entries))

    def test_table(self):
        table = count_table(Counter({'a': 2, 'b': 1}), title='thing')
        self.assertIn('thing', table)
        self.assertIn('TOTAL', table)

    def test_summary(self):
        errors = []
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', NomBankWarning)
            load([LINE_SURPRISE, LINE_GARBAGE], _treebank(), errors=errors)
        report = summary(self.entries, errors)
        self.assertIn('ARG0', report)
        self.assertIn('single', report)
        self.assertIn('ValueError', report)
