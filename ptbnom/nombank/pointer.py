# -*- coding: utf-8 -*-
# License: BSD3

"""
NomBank pointer expressions.

An annotation in a NomBank line looks like `4:0*9:1-ARG1-PRD`:

    * one or more `TOKEN:STEPS` pointers: the index of a word of the tree
      (traces included, counting from 0) and how many parent links to
      follow from it
    * pointers are joined by `*` (coreference: all of them stand for the
      same argument) or `,` (the argument is split over several
      constituents)
    * after a `-`, the role label, then zero or more `-`-separated
      function tags

`parse_pointer_expr` reads the syntax; `resolve_annotation` also
resolves the pointers against a tree and returns a
`ptbnom.nombank.annotation.NomBankAnnotation`.
"""

import funcparserlib.parser as fp

from .annotation import NomBankAnnotation, Pointer, PointerType


class PointerResolutionException(Exception):
    """
    A pointer expression that is malformed or that does not fit the
    tree it is resolved against
    """
    def __init__(self, msg, expr=None):
        super(PointerResolutionException, self).__init__(msg)
        self.expr = expr


# ---------------------------------------------------------------------
# funcparserlib utilities
# ---------------------------------------------------------------------
_unarg = lambda f: lambda x: f(*x)


def _mkstr(x):
    return "".join(x)


def _satisfies(fn):
    return fp.some(fn)


def _oneof(xs):
    return _satisfies(lambda x: x in xs)


def _mk_pointers(pair):
    """
    Pointer type and list of pointers from the first pointer and the
    (separator, pointer) pairs that follow it.

    A chain using both separators is a coreference chain.
    """
    head, tail = pair
    seps = [sep for sep, _ in tail]
    if '*' in seps:
        ptype = PointerType.COREFERENCE
    elif ',' in seps:
        ptype = PointerType.NOT_A_CONSTITUENT
    else:
        ptype = PointerType.SINGLE
    return ptype, [head] + [ptr for _, ptr in tail]


def _mk_expr(pointers, tags):
    ptype, ptrs = pointers
    return ptype, ptrs, tags[0], tuple(tags[1:])


# ---------------------------------------------------------------------
# elementary parts
# ---------------------------------------------------------------------
_nat = fp.oneplus(_satisfies(lambda c: c.isdigit())) >> (
    lambda x: int(_mkstr(x)))
_colon = fp.skip(_oneof(":"))
_dash = fp.skip(_oneof("-"))
_sep = _oneof("*,")
_eof = fp.skip(fp.finished)
_tag = fp.oneplus(_satisfies(lambda c: c != '-' and not c.isspace())) >> \
    _mkstr

# ---------------------------------------------------------------------
# pointer expressions
# ---------------------------------------------------------------------
_pointer = _nat + _colon + _nat >> _unarg(Pointer)
_pointers = _pointer + fp.many(_sep + _pointer) >> _mk_pointers
_pointer_expr = _pointers + fp.oneplus(_dash + _tag) + _eof >> \
    _unarg(_mk_expr)


def parse_pointer_expr(expr):
    """Read a pointer expression without resolving it.

    Parameters
    ----------
    expr : str
        Pointer expression, eg. `4:0*9:1-ARG1-PRD`.

    Returns
    -------
    pointer_type : PointerType

    pointers : list of Pointer
        In the order of the expression.

    label : str
        Role label, eg. `ARG1`.

    function_tags : tuple of str
        Eg. `('PRD',)`.
    """
    try:
        return _pointer_expr.parse(expr.strip())
    except fp.NoParseError as err:
        raise PointerResolutionException(
            'Malformed pointer expression %r: %s' % (expr, err), expr=expr)


def resolve_pointer(words, pointer, expr=None):
    """
    Node designated by a pointer: go up `pointer.steps` parents from
    the word at position `pointer.token`.

    Parameters
    ----------
    words : list of PtbNode
        Word nodes of the tree, in order (see `PtbNode.word_nodes`).
    pointer : Pointer
    expr : str, optional
        Expression the pointer comes from (for error reporting).
    """
    if not 0 <= pointer.token < len(words):
        raise PointerResolutionException(
            'Token %d out of range in %r: the tree has %d words'
            % (pointer.token, expr, len(words)), expr=expr)
    node = words[pointer.token]
    if pointer.steps > node.depth:
        raise PointerResolutionException(
            'Cannot go up %d steps from word %d (%s) in %r: it only has '
            '%d ancestors' % (pointer.steps, pointer.token, node.content,
                              expr, node.depth), expr=expr)
    for _ in range(pointer.steps):
        node = node.parent
    return node


def resolve_annotation(tree, expr, words=None):
    """Resolve a pointer expression against a tree.

    Parameters
    ----------
    tree : PtbNode
        Root of the tree the expression refers to.
    expr : str
        Pointer expression, eg. `4:0*9:1-ARG1-PRD`.
    words : list of PtbNode, optional
        Word nodes of the tree, if already computed.

    Returns
    -------
    annotation : NomBankAnnotation
        Nodes in the order of the pointers.
    """
    ptype, pointers, label, tags = parse_pointer_expr(expr)
    if words is None:
        words = tree.word_nodes()
    nodes = tuple(resolve_pointer(words, ptr, expr) for ptr in pointers)
    return NomBankAnnotation(nodes, ptype, label, tags)
