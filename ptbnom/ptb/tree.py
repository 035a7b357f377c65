# License: BSD3

"""
Node model for Penn Treebank parse trees.

A `PtbNode` is a node in a rooted, ordered, labelled tree. Terminal
nodes are words: the PTB preterminal `(NN cat)` is collapsed into one
leaf with `content='cat'` and `pos_tag='NN'`, so that the n-th leaf of a
tree is its n-th token (traces included), which is what NomBank token
numbers refer to.

Trees are built bottom-up with `add_child` and then frozen; once frozen
their topology cannot change. Parent links are back-references used for
upward navigation only.
"""

from collections import namedtuple

from nltk import Tree

from .annotation import NULL_ELEMENT, split_label
from .head_finder import COLLINS, GERBER


class PtbStructureException(Exception):
    """
    Exceptions related to PTB trees not looking like we would
    expect them to
    """
    def __init__(self, msg):
        super(PtbStructureException, self).__init__(msg)


class Rule(namedtuple('Rule', ['lhs', 'rhs'])):
    """
    A context free production read off a tree node: the category of
    the node and the tuple of the categories of its children
    """
    def __str__(self):
        return '%s -> %s' % (self.lhs, ' '.join(self.rhs))


def _children(node):
    "expand a node left to right"
    return node.children


def _children_rtl(node):
    "expand a node right to left"
    return reversed(node.children)


def _is_leaf(node):
    return node.is_leaf()


def _never(_):
    return False


def _always(_):
    return True


class PtbNode(object):
    """
    A node of a PTB parse tree.

    :param content: surface form for a word, basic syntactic category
        (eg. `NP`) for a phrase
    :type content: string

    :param labels: function tags and indices that came with the
        category, eg. `('SBJ', '1')` for `NP-SBJ-1`
    :type labels: sequence of string

    :param pos_tag: part of speech tag (words only)
    :type pos_tag: string
    """
    def __init__(self, content, labels=(), pos_tag=None):
        self.depth = 0
        "distance to the root (0 for the root)"
        self.content = content
        self.labels = tuple(labels)
        self.pos_tag = pos_tag
        self.children = []
        self.parent = None
        self._frozen = False

    def __str__(self):
        return self.content

    def __repr__(self):
        return 'PtbNode(%s, depth=%d)' % (self.label(), self.depth)

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------
    def add_child(self, node):
        """
        Append a node (and the subtree it heads) as the last child of
        this node. This is the only way to change the topology of a
        tree and is refused once the tree is frozen.

        Return the added node.
        """
        if self._frozen:
            raise PtbStructureException(
                "Cannot add %r under %r: tree is frozen" % (node, self))
        if node._frozen:
            raise PtbStructureException(
                "Cannot add %r under %r: it belongs to a frozen tree"
                % (node, self))
        if node.parent is not None:
            raise PtbStructureException(
                "Cannot add %r under %r: it already has a parent %r"
                % (node, self, node.parent))
        if node is self.root():
            raise PtbStructureException(
                "Cannot add %r under %r: this would create a cycle"
                % (node, self))
        node.parent = self
        self.children.append(node)
        # pre-order: parents are rebased before their kids
        for desc in node.nodes():
            desc.depth = desc.parent.depth + 1
        return node

    def freeze(self):
        """
        Make the whole tree this node belongs to read-only.

        Return self.
        """
        for node in self.root().nodes():
            node._frozen = True
        return self

    def is_frozen(self):
        "True if `add_child` is no longer allowed on this tree"
        return self._frozen

    @classmethod
    def from_nltk(cls, tree):
        """Build a frozen tree from an NLTK tree with string leaves.

        Preterminals become word nodes; phrase labels are split into
        their basic category and function tags (see
        `ptbnom.ptb.annotation.split_label`).

        Parameters
        ----------
        tree : nltk.Tree
            Bracketed parse tree, eg. as read by NLTK's
            `BracketParseCorpusReader`.

        Returns
        -------
        root : PtbNode
        """
        def step(subtree):
            """Recursive helper for tree building"""
            if not isinstance(subtree, Tree):
                raise PtbStructureException(
                    "Word %r is not under a part of speech" % (subtree,))
            category, extras = split_label(subtree.label())
            if len(subtree) == 1 and not isinstance(subtree[0], Tree):
                word = subtree[0]
                # NLTK recovers unbalanced brackets as (word, tag) pairs
                if not isinstance(word, str):
                    raise PtbStructureException(
                        "Malformed word %r under %s" % (word, category))
                return cls(word, extras, pos_tag=category)
            if not len(subtree):
                raise PtbStructureException(
                    "Empty constituent %r" % subtree.label())
            node = cls(category, extras)
            for kid in subtree:
                node.add_child(step(kid))
            return node

        return step(tree).freeze()

    @classmethod
    def from_string(cls, bracketed):
        """Build a frozen tree from a bracketed string.

        An unlabelled wrapper around the tree, as in `( (S ...) )`,
        is dropped.
        """
        tree = Tree.fromstring(bracketed)
        if tree.label() == '' and len(tree) == 1:
            tree = tree[0]
        return cls.from_nltk(tree)

    def to_nltk(self):
        """
        NLTK view of the subtree headed by this node (eg. for
        pretty printing); words are rendered as preterminals again
        """
        if self.is_leaf():
            if self.pos_tag is None:
                return self.content
            return Tree(_join_label(self.pos_tag, self.labels),
                        [self.content])
        return Tree(self.label(), [kid.to_nltk() for kid in self.children])

    # ------------------------------------------------------------------
    # local views
    # ------------------------------------------------------------------
    def __getitem__(self, idx):
        return self.children[idx]

    def label(self):
        "category followed by the function tags, as in the treebank"
        return _join_label(self.syntactic_category, self.labels)

    def is_leaf(self):
        "True if the node has no children"
        return not self.children

    def is_word(self):
        "Words are the leaves of the tree (traces included)"
        return self.is_leaf()

    def is_root(self):
        "True if the node has no parent"
        return self.parent is None

    @property
    def syntactic_category(self):
        """
        Part of speech for a word, category for a phrase
        """
        if self.is_leaf() and self.pos_tag is not None:
            return self.pos_tag
        return self.content

    @property
    def index(self):
        """
        Position of this node among the children of its parent
        """
        siblings = self._siblings()
        for i, sib in enumerate(siblings):
            if sib is self:
                return i
        raise PtbStructureException(
            "%r is not among the children of its parent" % self)

    def _siblings(self):
        "children of the parent (precondition: not the root)"
        if self.parent is None:
            raise PtbStructureException(
                "%r is a root: it has no position or siblings" % self)
        return self.parent.children

    def left_siblings(self):
        """
        Children of the parent strictly before this node, in order.
        Raise `PtbStructureException` on a root.
        """
        return self._siblings()[:self.index]

    def right_siblings(self):
        """
        Children of the parent strictly after this node, in order.
        Raise `PtbStructureException` on a root.
        """
        return self._siblings()[self.index + 1:]

    def rule(self):
        """
        Production at this node (see `Rule`)
        """
        return Rule(self.syntactic_category,
                    tuple(kid.syntactic_category for kid in self.children))

    def is_null_element(self):
        """
        True for an empty category (`-NONE-`) and for phrases that
        only dominate empty categories
        """
        if self.is_leaf():
            return self.syntactic_category == NULL_ELEMENT
        return all(leaf.syntactic_category == NULL_ELEMENT
                   for leaf in self.leaves())

    # ------------------------------------------------------------------
    # traversal
    # ------------------------------------------------------------------
    def traverse(self, expand, stop, accept, on_visit=None):
        """
        Depth-first, pre-order walk from this node.

        Parameters
        ----------
        expand : function from PtbNode to sequence of PtbNode
            Nodes to descend into, in the order they should be
            visited (eg. reversed children for a right-to-left scan).
        stop : function from PtbNode to bool
            Do not descend below nodes for which this is True.
        accept : function from PtbNode to bool
            Yield the nodes for which this is True.
        on_visit : function from PtbNode, optional
            Called on every visited node, accepted or not.

        Returns
        -------
        accepted : iterator of PtbNode
            Accepted nodes, in visit order (lazily).
        """
        stack = [self]
        while stack:
            node = stack.pop()
            if on_visit is not None:
                on_visit(node)
            if accept(node):
                yield node
            if not stop(node):
                stack.extend(reversed(list(expand(node))))

    def nodes(self):
        """
        All nodes of the subtree headed by this node (including
        itself), pre-order, left to right
        """
        return self.traverse(_children, _never, _always)

    def leaves(self):
        """
        Words of the subtree, left to right (lazily)
        """
        return self.traverse(_children, _is_leaf, _is_leaf)

    def word_nodes(self):
        "list of the word nodes of the subtree"
        return list(self.leaves())

    def words(self):
        "list of the surface forms of the subtree"
        return [leaf.content for leaf in self.leaves()]

    def first_word_node(self):
        "leftmost word of the subtree"
        return next(self.traverse(_children, _is_leaf, _is_leaf))

    def last_word_node(self):
        "rightmost word of the subtree"
        return next(self.traverse(_children_rtl, _is_leaf, _is_leaf))

    @property
    def first_word(self):
        return self.first_word_node().content

    @property
    def first_pos(self):
        return self.first_word_node().pos_tag

    @property
    def last_word(self):
        return self.last_word_node().content

    @property
    def last_pos(self):
        return self.last_word_node().pos_tag

    def ancestors(self):
        """
        Chain of nodes from the parent up to the root (nearest first);
        empty for the root
        """
        res = []
        node = self.parent
        while node is not None:
            res.append(node)
            node = node.parent
        return res

    def root(self):
        "root of the tree this node belongs to"
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def rules(self):
        """
        Productions of all the phrases of the subtree, pre-order
        """
        return (node.rule() for node in self.nodes() if not node.is_leaf())

    # ------------------------------------------------------------------
    # heads (computed on each call)
    # ------------------------------------------------------------------
    def syntax_head(self):
        """
        Head constituent among the children, after Collins (None for
        a word)
        """
        return COLLINS.find(self)

    def syntax_head_word(self):
        """
        Word reached by following syntactic heads down from this node
        """
        return COLLINS.head_word(self)

    def semantic_head(self):
        """
        Semantic head word, after Gerber
        """
        return GERBER.find(self)


def _join_label(category, extras):
    "inverse of `ptbnom.ptb.annotation.split_label`"
    parts = [category]
    for extra in extras:
        parts.append(extra if extra.startswith('=') else '-' + extra)
    return ''.join(parts)
