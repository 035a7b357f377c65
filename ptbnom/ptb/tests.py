# License: BSD3

# pylint: disable=R0904

"""
Tests for ptbnom.ptb
"""

import os
import shutil
import tempfile
import unittest
import warnings

from frozendict import frozendict
from nltk import Tree

from ptbnom.corpus import FileId
from .annotation import basic_category, split_label
from .corpus import PtbWarning, Reader, mk_key
from .head_finder import (COLLINS, GERBER, HEAD_RULES, LEFT, RIGHT,
                          SemanticHeadFinder, SyntacticHeadFinder,
                          load_head_rules)
from .tree import PtbNode, PtbStructureException, Rule


# ---------------------------------------------------------------------
# example trees
# ---------------------------------------------------------------------

TSTR_CAT = """
( (S (NP-SBJ (DT The) (NN cat))
     (VP (VBD sat)
         (PP-LOC (IN on)
                 (NP (DT the) (NN mat))))
     (. .)) )
"""

TSTR_TRACE = """
( (S (NP-SBJ-1 (NNP John))
     (VP (VBD tried)
         (S (NP-SBJ (-NONE- *-1))
            (VP (TO to)
                (VP (VB leave)))))
     (. .)) )
"""

TSTR_POSS = "(NP (NP (NNP John) (POS 's)) (NN dog))"


def _find(tree, content):
    "first node of the tree with this content"
    return next(n for n in tree.nodes() if n.content == content)


class LabelTest(unittest.TestCase):
    """PTB label conventions"""

    def test_basic_category(self):
        self.assertEqual('NP', basic_category('NP-SBJ-1'))
        self.assertEqual('-NONE-', basic_category('-NONE-'))
        self.assertEqual('-LRB-', basic_category('-LRB-'))
        self.assertEqual('PRP$', basic_category('PRP$'))

    def test_split_label(self):
        self.assertEqual(('NP', ('SBJ', '1')), split_label('NP-SBJ-1'))
        self.assertEqual(('S', ('TPC', '=2')), split_label('S-TPC=2'))
        self.assertEqual(('S', ('=2',)), split_label('S=2'))
        self.assertEqual(('-NONE-', ()), split_label('-NONE-'))
        self.assertEqual(('', ()), split_label(''))


class TreeBuildTest(unittest.TestCase):
    """Building trees"""

    def setUp(self):
        self.tree = PtbNode.from_string(TSTR_CAT)

    def test_preterminals_are_words(self):
        words = self.tree.word_nodes()
        self.assertEqual(['The', 'cat', 'sat', 'on', 'the', 'mat', '.'],
                         [w.content for w in words])
        self.assertEqual(['DT', 'NN', 'VBD', 'IN', 'DT', 'NN', '.'],
                         [w.pos_tag for w in words])
        self.assertTrue(all(w.is_leaf() and w.is_word() for w in words))
        self.assertFalse(self.tree.is_word())

    def test_labels_split(self):
        subj = self.tree[0]
        self.assertEqual('NP', subj.content)
        self.assertEqual(('SBJ',), subj.labels)
        self.assertEqual('NP-SBJ', subj.label())
        self.assertEqual('S', self.tree.syntactic_category)

    def test_depth(self):
        self.assertEqual(0, self.tree.depth)
        depths = dict((w.content, w.depth) for w in self.tree.leaves())
        self.assertEqual(2, depths['The'])
        self.assertEqual(3, depths['on'])
        self.assertEqual(4, depths['mat'])
        self.assertEqual(1, depths['.'])
        for node in self.tree.nodes():
            self.assertEqual(len(node.ancestors()), node.depth)

    def test_frozen(self):
        self.assertTrue(self.tree.is_frozen())
        self.assertRaises(PtbStructureException,
                          self.tree.add_child, PtbNode('x', pos_tag='NN'))
        self.assertRaises(PtbStructureException,
                          PtbNode('X').add_child, self.tree[0])

    def test_manual_build(self):
        root = PtbNode('S')
        subj = root.add_child(PtbNode('NP'))
        dog = subj.add_child(PtbNode('dog', pos_tag='NN'))
        verb = PtbNode('VP')
        ran = verb.add_child(PtbNode('ran', pos_tag='VBD'))
        self.assertEqual(1, ran.depth)
        root.add_child(verb)
        self.assertEqual(2, ran.depth)
        self.assertEqual(2, dog.depth)
        self.assertEqual(['dog', 'ran'], root.words())
        # already has a parent
        self.assertRaises(PtbStructureException,
                          root.add_child, dog)
        # cycle
        self.assertRaises(PtbStructureException,
                          subj.add_child, root)
        self.assertRaises(PtbStructureException,
                          root.add_child, root)
        root.freeze()
        self.assertTrue(dog.is_frozen())
        self.assertRaises(PtbStructureException,
                          subj.add_child, PtbNode('cat', pos_tag='NN'))

    def test_from_nltk_errors(self):
        self.assertRaises(PtbStructureException,
                          PtbNode.from_nltk, Tree('NP', ['dog', 'cat']))
        self.assertRaises(PtbStructureException,
                          PtbNode.from_nltk, Tree('NP', []))

    def test_recovered_pairs(self):
        # what NLTK's corpus reader makes of unbalanced brackets
        self.assertRaises(PtbStructureException, PtbNode.from_nltk,
                          Tree('S', [('a', 'DT'), ('dog', 'NN')]))
        self.assertRaises(PtbStructureException, PtbNode.from_nltk,
                          Tree('S', [('a', 'DT')]))

    def test_to_nltk(self):
        expected = Tree.fromstring(TSTR_TRACE)[0]
        tree = PtbNode.from_string(TSTR_TRACE)
        self.assertEqual(expected, tree.to_nltk())


class TreeNavigationTest(unittest.TestCase):
    """Traversal and structural views"""

    def setUp(self):
        self.tree = PtbNode.from_string(TSTR_CAT)

    def test_root_ancestors(self):
        self.assertEqual([], self.tree.ancestors())
        for leaf in self.tree.leaves():
            ancestors = leaf.ancestors()
            self.assertIs(leaf.parent, ancestors[0])
            self.assertIs(self.tree, ancestors[-1])

    def test_index(self):
        for node in self.tree.nodes():
            if node.is_root():
                continue
            owners = [n for n in self.tree.nodes()
                      if any(k is node for k in n.children)]
            self.assertEqual(1, len(owners))
            self.assertIs(node.parent, owners[0])
            self.assertIs(node, node.parent.children[node.index])

    def test_siblings(self):
        for node in self.tree.nodes():
            if node.is_root():
                continue
            self.assertEqual(node.parent.children,
                             node.left_siblings() + [node] +
                             node.right_siblings())
        verb = _find(self.tree, 'VP')
        self.assertEqual(['NP'], [n.content for n in verb.left_siblings()])
        self.assertEqual(['.'], [n.content for n in verb.right_siblings()])

    def test_root_has_no_siblings(self):
        self.assertRaises(PtbStructureException, self.tree.left_siblings)
        self.assertRaises(PtbStructureException, self.tree.right_siblings)
        self.assertRaises(PtbStructureException, lambda: self.tree.index)

    def test_first_last_word(self):
        self.assertEqual('The', self.tree.first_word)
        self.assertEqual('.', self.tree.last_word)
        subj = self.tree[0]
        self.assertEqual('DT', subj.first_pos)
        self.assertEqual('cat', subj.last_word)
        self.assertEqual('NN', subj.last_pos)
        mat = self.tree.word_nodes()[5]
        self.assertIs(mat, mat.first_word_node())

    def test_traverse(self):
        visited = []
        accepted = list(self.tree.traverse(lambda n: n.children,
                                           lambda n: n.content == 'PP',
                                           lambda n: n.is_leaf(),
                                           visited.append))
        # nothing below the PP
        self.assertEqual(['The', 'cat', 'sat', '.'],
                         [n.content for n in accepted])
        self.assertNotIn('on', [n.content for n in visited])
        self.assertIn('PP', [n.content for n in visited])

    def test_traverse_right_to_left(self):
        accepted = self.tree.traverse(lambda n: reversed(n.children),
                                      lambda n: False,
                                      lambda n: n.is_leaf())
        self.assertEqual(list(reversed(self.tree.words())),
                         [n.content for n in accepted])

    def test_rule(self):
        self.assertEqual(Rule('S', ('NP', 'VP', '.')), self.tree.rule())
        self.assertEqual('S -> NP VP .', str(self.tree.rule()))
        self.assertEqual(Rule('NN', ()), self.tree.word_nodes()[1].rule())
        rules = list(self.tree.rules())
        self.assertEqual(5, len(rules))
        self.assertIn(Rule('PP', ('IN', 'NP')), rules)


class NullElementTest(unittest.TestCase):
    """Empty categories"""

    def setUp(self):
        self.tree = PtbNode.from_string(TSTR_TRACE)

    def test_leaves(self):
        trace = self.tree.word_nodes()[2]
        self.assertEqual('*-1', trace.content)
        self.assertTrue(trace.is_null_element())
        for idx in [0, 1, 3, 4, 5]:
            self.assertFalse(self.tree.word_nodes()[idx].is_null_element())

    def test_phrases(self):
        trace = self.tree.word_nodes()[2]
        self.assertTrue(trace.parent.is_null_element())
        self.assertFalse(trace.parent.parent.is_null_element())
        self.assertFalse(self.tree.is_null_element())

    def test_childless_phrase(self):
        # a node without children is judged on its own category
        self.assertFalse(PtbNode('NP').is_null_element())
        self.assertTrue(PtbNode('*', pos_tag='-NONE-').is_null_element())


class HeadRulesTest(unittest.TestCase):
    """Rule table"""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write(self, text):
        fname = os.path.join(self.tmpdir, 'rules')
        with open(fname, 'w') as stream:
            stream.write(text)
        return fname

    def test_collins_table(self):
        self.assertEqual(((RIGHT, ('IN', 'TO', 'VBG', 'VBN', 'RP', 'FW')),),
                         HEAD_RULES['PP'])
        self.assertEqual(((RIGHT, ()),), HEAD_RULES['UCP'])
        self.assertNotIn('NP', HEAD_RULES)

    def test_tiers(self):
        fname = self._write("# comment\n"
                            "VP\tLeft\tMD\n"
                            "VP\tright\tVB VBZ\n"
                            "FRAG\tright\t_\n")
        rules = load_head_rules(fname)
        self.assertEqual(((LEFT, ('MD',)), (RIGHT, ('VB', 'VBZ'))),
                         rules['VP'])
        self.assertEqual(((RIGHT, ()),), rules['FRAG'])

        def tamper():
            "rule tables are read-only"
            rules['X'] = ()
        self.assertRaises(TypeError, tamper)

    def test_bad_direction(self):
        fname = self._write("VP\tup\tMD\n")
        self.assertRaises(ValueError, load_head_rules, fname)


class SyntacticHeadTest(unittest.TestCase):
    """Collins heads"""

    def test_sentence(self):
        tree = PtbNode.from_string(TSTR_CAT)
        self.assertEqual('VP', tree.syntax_head().content)
        self.assertEqual('sat', tree.syntax_head_word().content)
        self.assertEqual('cat', tree[0].syntax_head_word().content)
        pp_node = _find(tree, 'PP')
        self.assertEqual('on', pp_node.syntax_head_word().content)

    def test_word(self):
        tree = PtbNode.from_string(TSTR_CAT)
        word = tree.word_nodes()[0]
        self.assertIsNone(word.syntax_head())
        self.assertIs(word, word.syntax_head_word())

    def test_np(self):
        tree = PtbNode.from_string(TSTR_POSS)
        self.assertEqual('dog', tree.syntax_head_word().content)
        self.assertEqual("'s", tree[0].syntax_head_word().content)
        tree = PtbNode.from_string("(NP (DT the) (JJ big) (CD 3))")
        self.assertEqual('3', tree.syntax_head_word().content)

    def test_unary(self):
        tree = PtbNode.from_string(TSTR_TRACE)
        subj = tree.word_nodes()[2].parent
        self.assertIs(subj[0], subj.syntax_head())

    def test_infinitive(self):
        tree = PtbNode.from_string(TSTR_TRACE)
        to_vp = tree.word_nodes()[3].parent
        self.assertEqual('to', to_vp.syntax_head_word().content)

    def test_coordination(self):
        tree = PtbNode.from_string("(UCP (NN x) (CC and) (JJ y))")
        self.assertEqual('x', tree.syntax_head_word().content)

    def test_default_direction(self):
        tree = PtbNode.from_string("(FOO (NN a) (NN b))")
        self.assertEqual('b', COLLINS.find(tree).content)
        lefty = SyntacticHeadFinder(default_direction=LEFT)
        self.assertEqual('a', lefty.find(tree).content)
        none = SyntacticHeadFinder(default_direction=None)
        self.assertIsNone(none.find(tree))
        self.assertIsNone(none.head_word(tree))
        self.assertIsNone(SemanticHeadFinder(syntactic=none).find(tree))

    def test_tiers(self):
        rules = frozendict({'VP': ((LEFT, ('MD',)), (RIGHT, ('VB',)))})
        finder = SyntacticHeadFinder(rules=rules)
        tree = PtbNode.from_string("(VP (VB go) (RB now) (VB stay))")
        self.assertEqual('stay', finder.head_word(tree).content)
        tree = PtbNode.from_string("(VP (VB go) (MD can) (MD will))")
        self.assertEqual('can', finder.head_word(tree).content)
        # no match: first child in the direction of the last tier
        tree = PtbNode.from_string("(VP (RB x) (RB y))")
        self.assertEqual('y', finder.head_word(tree).content)


class SemanticHeadTest(unittest.TestCase):
    """Gerber heads"""

    def test_preposition(self):
        tree = PtbNode.from_string(TSTR_CAT)
        on_word = tree.word_nodes()[3]
        mat = tree.word_nodes()[5]
        self.assertIs(mat, GERBER.find(on_word))
        pp_node = _find(tree, 'PP')
        self.assertIs(on_word, pp_node.syntax_head_word())
        self.assertIs(mat, pp_node.semantic_head())

    def test_no_shift(self):
        tree = PtbNode.from_string(TSTR_CAT)
        self.assertEqual('sat', tree.semantic_head().content)
        self.assertEqual('cat', tree[0].semantic_head().content)

    def test_infinitive(self):
        tree = PtbNode.from_string(TSTR_TRACE)
        to_vp = tree.word_nodes()[3].parent
        self.assertEqual('leave', to_vp.semantic_head().content)

    def test_possessive(self):
        tree = PtbNode.from_string(TSTR_POSS)
        self.assertEqual('John', tree[0].semantic_head().content)

    def test_skip_null_sibling(self):
        tree = PtbNode.from_string(
            "(PP (IN of) (NP (-NONE- *T*-1)) (NP (NN cake)))")
        self.assertEqual('cake', tree.semantic_head().content)

    def test_no_qualifying_sibling(self):
        tree = PtbNode.from_string("(PP (IN of) (NP (-NONE- *T*-1)))")
        self.assertEqual('of', tree.semantic_head().content)

    def test_root_word(self):
        word = PtbNode('of', pos_tag='IN')
        self.assertIs(word, GERBER.find(word))

    def test_mutual_shift_terminates(self):
        tree = PtbNode.from_string("(X (IN a) (POS b))")
        self.assertIs(tree[1], GERBER.find(tree))
        self.assertIs(tree[1], GERBER.find(tree[0]))
        self.assertIs(tree[0], GERBER.find(tree[1]))

    def test_idempotent(self):
        tree = PtbNode.from_string(TSTR_CAT)
        for node in tree.nodes():
            self.assertIs(GERBER.find(node), GERBER.find(node))


class ReaderTest(unittest.TestCase):
    """Reading the treebank"""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        os.mkdir(os.path.join(self.tmpdir, '00'))
        with open(os.path.join(self.tmpdir, '00', 'wsj_0001.mrg'),
                  'w') as stream:
            stream.write(TSTR_CAT)
            stream.write(TSTR_TRACE)
        with open(os.path.join(self.tmpdir, '00', 'README'), 'w') as stream:
            stream.write('not a tree\n')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_mk_key(self):
        self.assertEqual(FileId(23, 12), mk_key('wsj_2312.mrg'))
        self.assertEqual('wsj_2312', mk_key('wsj_2312.mrg').doc)
        self.assertIsNone(mk_key('wsj_2312.pdtb'))

    def test_files(self):
        files = Reader(self.tmpdir).files()
        self.assertEqual({FileId(0, 1): os.path.join('00', 'wsj_0001.mrg')},
                         files)

    def test_slurp_trees(self):
        trees = Reader(self.tmpdir).slurp_trees()
        self.assertEqual([(0, 1)], list(trees))
        self.assertEqual(2, len(trees[(0, 1)]))
        first, second = trees[(0, 1)]
        self.assertEqual('The', first.first_word)
        self.assertEqual('S', first.content)
        self.assertEqual('*-1', second.word_nodes()[2].content)
        self.assertTrue(second.is_frozen())

    def test_filter_and_ids(self):
        reader = Reader(self.tmpdir)
        os.mkdir(os.path.join(self.tmpdir, '02'))
        shutil.copy(os.path.join(self.tmpdir, '00', 'wsj_0001.mrg'),
                    os.path.join(self.tmpdir, '02', 'wsj_0203.mrg'))
        files = reader.files()
        self.assertEqual([FileId(0, 1), FileId(2, 3)], sorted(files))
        train = reader.filter(files, lambda k: 2 <= k.section <= 21)
        self.assertEqual([FileId(2, 3)], list(train))
        corpus = reader.slurp(train)
        self.assertEqual([FileId(2, 3)], list(corpus))
        self.assertEqual('wsj_0203_1', FileId(2, 3).mk_global_id(1))
        only_00 = reader.files(doc_glob=os.path.join('00', '*.mrg'))
        self.assertEqual([FileId(0, 1)], list(only_00))

    def test_bad_tree_left_out(self):
        # unbalanced brackets, last in its file
        with open(os.path.join(self.tmpdir, '00', 'wsj_0002.mrg'),
                  'w') as stream:
            stream.write(TSTR_CAT)
            stream.write("( (S (NP (DT a) (NN dog)) )\n")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            trees = Reader(self.tmpdir).slurp_trees()
        self.assertEqual([(0, 1), (0, 2)], sorted(trees))
        self.assertEqual(2, len(trees[(0, 1)]))
        good, bad = trees[(0, 2)]
        self.assertEqual('The', good.first_word)
        self.assertIsNone(bad)
        ptb_warnings = [w for w in caught
                        if issubclass(w.category, PtbWarning)]
        self.assertEqual(1, len(ptb_warnings))
        self.assertIn('wsj_0002 tree 1', str(ptb_warnings[0].message))
