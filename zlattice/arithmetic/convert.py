"""The conversion graph between refined integer classes and machine primitives.

A conversion from A to B is infallible (B.from_) exactly when every value
admissible in A is admissible in B; every other conversion is fallible
(B.try_from) and re-validates. Nothing that is not already a Prime converts
structurally into a Prime kind: primality is checked by the constructor,
from plain or numpy integers only.
"""

from collections import deque

import numpy as np

from ..lattice import widths
from ..lattice.utils import ConversionError
from . import integer


def is_refined(node):
    return isinstance(node, type) and issubclass(node, integer.RefinedInteger)


def domain_of(node):
    """Admissible set of a refined integer class or a primitive."""
    if is_refined(node):
        return node.domain()
    elif isinstance(node, widths.Primitive):
        return node.domain()
    else:
        raise ConversionError('{} is not a node of the conversion graph'.format(repr(node)))


def node_of(x):
    """The graph node a value lives at, or None for values with no static
    domain (Python ints and mpz), which can only be converted with try_from.
    """
    if isinstance(x, integer.RefinedInteger):
        return type(x)
    elif isinstance(x, np.integer):
        return widths.primitive_of(x)
    else:
        return None


def is_infallible(src, dst):
    return domain_of(src).issubset(domain_of(dst))


def has_edge(src, dst):
    """Is there any conversion from src to dst?"""
    if src is dst:
        return False
    if isinstance(src, widths.Primitive) and isinstance(dst, widths.Primitive):
        return False
    if is_refined(dst) and dst._rule.prime and is_refined(src) and not src._rule.prime:
        return False
    return True


def convert(x, dst):
    """Move a value to a node, infallibly if the graph allows it."""
    src = node_of(x)
    if src is not None and is_infallible(src, dst):
        return dst.from_(x)
    else:
        return dst.try_from(x)


def default_nodes():
    """Every (kind, width) class with the checked policy, and every machine
    primitive that has a numpy dtype.
    """
    prims = [p for p in widths.PRIMITIVES if p.dtype is not None and not p.nonzero]
    return integer.all_sized() + prims


class ConversionGraph(object):
    """The directed graph of conversions among a set of nodes."""

    def __init__(self, nodes=None):
        if nodes is None:
            nodes = default_nodes()
        self.nodes = tuple(nodes)
        self._succs = {}
        for a in self.nodes:
            self._succs[a] = tuple(b for b in self.nodes if has_edge(a, b) and is_infallible(a, b))

    def __repr__(self):
        return '{}(nodes={})'.format(type(self).__name__, len(self.nodes))

    def is_infallible(self, src, dst):
        return dst in self._succs[src]

    def edges(self):
        """Every edge, as (src, dst, infallible)."""
        return [(a, b, b in self._succs[a])
                for a in self.nodes for b in self.nodes if has_edge(a, b)]

    def infallible_edges(self):
        return [(a, b) for a in self.nodes for b in self._succs[a]]

    def successors(self, node):
        return self._succs[node]

    def path(self, src, dst):
        """Shortest chain of infallible conversions from src to dst, as a list
        of nodes starting at src, or None if dst is not reachable that way.
        """
        prev = {src: None}
        queue = deque([src])
        while queue:
            node = queue.popleft()
            if node is dst:
                path = []
                while node is not None:
                    path.append(node)
                    node = prev[node]
                return list(reversed(path))
            for succ in self._succs[node]:
                if succ not in prev:
                    prev[succ] = node
                    queue.append(succ)
        return None

    def follow(self, path, x):
        """Apply the conversions along a path, starting from a value at its first node."""
        for node in path[1:]:
            x = convert(x, node)
        return x
