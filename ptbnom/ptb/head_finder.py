"""This submodule provides head finders for PTB trees.

Syntactic heads use the head rules described in (Collins 1999),
Appendix A. See `http://www.cs.columbia.edu/~mcollins/papers/heads`,
Bikel's 2004 CL paper on the intricacies of Collins' parser
and the classes in (StanfordNLP) CoreNLP that inherit from
`AbstractCollinsHeadFinder.java` .

Semantic heads follow (Gerber and Chai 2010): the syntactic head word,
shifted away from function words (prepositions, infinitival `to`,
possessive markers, determiners) to the content of their sibling.

Both finders work on `ptbnom.ptb.tree.PtbNode` and compute heads on
demand; nothing is cached on the tree. A head that cannot be found is
reported as `None`.
"""

import os

from frozendict import frozendict


LEFT = 'left'
"scan children left to right"

RIGHT = 'right'
"scan children right to left"

HEAD_RULES_FILE = os.path.join(os.path.dirname(__file__),
                               'collins_head_rules')


def load_head_rules(f):
    """
    Load the head rules from file f.

    Each line is `parent<TAB>direction<TAB>priority list`, with `_`
    standing for an empty list; lines starting with `#` are comments.
    Several lines for the same parent are tiers, tried in order.

    Return a frozendict from parent non-terminal to a tuple of
    (direction, priority tuple) tiers.
    """
    rules = dict()
    with open(f) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            prnt_nt, drctn, prrty_lst = line.split('\t')
            drctn = drctn.lower()
            if drctn not in (LEFT, RIGHT):
                err_msg = 'Direction can only be left or right, got {}'
                raise ValueError(err_msg.format(drctn))
            lbls = tuple(prrty_lst.split()) if prrty_lst != '_' else ()
            rules.setdefault(prnt_nt, []).append((drctn, lbls))
    return frozendict((k, tuple(v)) for k, v in rules.items())


HEAD_RULES = load_head_rules(HEAD_RULES_FILE)


SHIFT_RULES = frozendict({
    'IN': LEFT,
    'TO': LEFT,
    'POS': RIGHT,
    'DT': LEFT,
    'PDT': LEFT,
})
"""
Part of speech tags whose semantic head lies in a sibling, with the
side to look at: `LEFT` means scanning the right siblings left to right,
`RIGHT` scanning the left siblings right to left (nearest sibling
first in both cases)
"""


# helper functions
def _scan(direction, n):
    "child indices in scan order"
    if direction == LEFT:
        return list(range(n))
    elif direction == RIGHT:
        return list(reversed(range(n)))
    else:
        err_msg = 'Direction can only be left or right, got {}'
        raise ValueError(err_msg.format(direction))


def _find_head_generic(tiers, cats):
    """Determine the index of the head child of a phrase.

    Each tier is tried in turn; within a tier, each label of the
    priority list is looked for in scan order. If nothing matches,
    return the first child in the direction of the last tier.
    """
    for drctn, prrty_lst in tiers:
        cands = _scan(drctn, len(cats))
        for lbl in prrty_lst:
            for c_idx in cands:
                if cats[c_idx] == lbl:
                    return c_idx
    return _scan(tiers[-1][0], len(cats))[0]


def _find_head_np(cats):
    """Find head child in NP following specific rules"""
    cands = list(range(len(cats)))
    # return last word if tagged 'POS'
    if cats[-1] == 'POS':
        return cands[-1]
    # else: RL search for NN, NNP, NNPS, NNS, NX, POS or JJR
    lset = set(['NN', 'NNP', 'NNPS', 'NNS', 'NX', 'POS', 'JJR'])
    for c_idx in reversed(cands):
        if cats[c_idx] in lset:
            return c_idx
    # else: LR search for NP
    for c_idx in cands:
        if cats[c_idx] == 'NP':
            return c_idx
    # else: RL search for $, ADJP or PRN
    lset = set(['$', 'ADJP', 'PRN'])
    for c_idx in reversed(cands):
        if cats[c_idx] in lset:
            return c_idx
    # else: RL search for CD
    for c_idx in reversed(cands):
        if cats[c_idx] == 'CD':
            return c_idx
    # else RL search for JJ, JJS, RB, QP
    lset = set(['JJ', 'JJS', 'RB', 'QP'])
    for c_idx in reversed(cands):
        if cats[c_idx] in lset:
            return c_idx
    # else return last word
    return cands[-1]


class HeadFinder(object):
    """
    Common interface of head finders: `find(node)` returns the head
    of a node, or None if it has none
    """
    def find(self, node):
        raise NotImplementedError


class SyntacticHeadFinder(HeadFinder):
    """
    Collins-style head finder: `find` picks the head child of a
    phrase, `head_word` follows head children down to a word.

    Parameters
    ----------
    rules : frozendict, optional
        Head rule table, as returned by `load_head_rules` (defaults
        to Collins' table).
    default_direction : one of {'left', 'right', None}
        For categories absent from the table: take the leftmost
        ('left') or rightmost ('right') child; None means such
        phrases have no head.
    """
    def __init__(self, rules=None, default_direction=RIGHT):
        self.rules = HEAD_RULES if rules is None else rules
        self.default_direction = default_direction

    def find(self, node):
        """Head child of a node; None for a word, or for a category
        without rule when there is no default direction"""
        kids = node.children
        if not kids:
            return None
        # no head rule for unary productions
        if len(kids) == 1:
            return kids[0]

        cats = [kid.syntactic_category for kid in kids]
        p_nt = node.syntactic_category
        if p_nt == 'NP':
            c_idx = _find_head_np(cats)
        else:
            tiers = self.rules.get(p_nt)
            if not tiers:
                if self.default_direction is None:
                    return None
                tiers = ((self.default_direction, ()),)
            c_idx = _find_head_generic(tiers, cats)

        # apply special post-rule for coordinated phrases (if needed)
        # if h > 2 and Y_h-1 == 'CC': head = Y_h-2
        if c_idx > 1 and cats[c_idx - 1] == 'CC':
            c_idx = c_idx - 2
        return kids[c_idx]

    def head_word(self, node):
        """
        Word reached by repeatedly taking the head child, starting
        from `node` (a word is its own head word).

        Each step goes one level down, so this stops after at most
        the height of the subtree. Return None if some phrase on the
        way has no head.
        """
        cur = node
        while not cur.is_leaf():
            cur = self.find(cur)
            if cur is None:
                return None
        return cur


class SemanticHeadFinder(HeadFinder):
    """
    Gerber-style head finder: `find` returns the semantic head word
    of a node.

    Parameters
    ----------
    syntactic : SyntacticHeadFinder, optional
        Finder for the syntactic head word (defaults to `COLLINS`).
    shift_rules : frozendict, optional
        Map from part of speech to shift direction (defaults to
        `SHIFT_RULES`).
    """
    def __init__(self, syntactic=None, shift_rules=None):
        self.syntactic = COLLINS if syntactic is None else syntactic
        self.shift_rules = SHIFT_RULES if shift_rules is None else shift_rules

    def find(self, node):
        return self._find(node, set())

    def _find(self, node, pending):
        """
        Semantic head of node; `pending` holds the nodes whose
        semantic head is being computed further up the call chain.

        Recursion only happens on siblings that are not pending, and
        `node` is pending while its siblings are explored, so the
        chain of calls never holds the same node twice.
        """
        head = self.syntactic.head_word(node)
        if head is None or head.parent is None:
            return head
        drctn = self.shift_rules.get(head.syntactic_category)
        if drctn is None:
            return head
        if drctn == LEFT:
            siblings = head.right_siblings()
        else:
            siblings = head.left_siblings()[::-1]

        pending.add(node)
        try:
            for sib in siblings:
                if sib in pending or sib.is_null_element():
                    continue
                sib_head = self._find(sib, pending)
                if sib_head is not None:
                    return sib_head
        finally:
            pending.discard(node)
        return head


COLLINS = SyntacticHeadFinder()
GERBER = SemanticHeadFinder()
