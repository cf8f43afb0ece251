import sys

from .lattice import utils
from .arithmetic import evalctx, integer, convert, rational


def show_kinds():
    for cls in integer.all_sized():
        lo, hi = cls.min_value(), cls.max_value()
        print('{:24} [{}, {}]'.format(cls.__name__, str(lo) if lo is not None else '-inf',
                                      str(hi) if hi is not None else 'inf'))
    print('')

def show_conversions():
    graph = convert.ConversionGraph()
    edges = graph.edges()
    infallible = graph.infallible_edges()
    print('{:d} nodes, {:d} conversions, {:d} infallible'.format(len(graph.nodes), len(edges), len(infallible)))

    src, dst = integer.PositiveInteger8, integer.Integer64
    path = graph.path(src, dst)
    print(' -> '.join(getattr(node, '__name__', repr(node)) for node in path))
    print(repr(graph.follow(path, src(200))))
    print('')

def show_arithmetic(precision='int8'):
    ctx = evalctx.IntCtx(props={'precision': precision})
    cls = integer.Integer.sized(ctx=ctx)
    a = cls(100)
    b = cls(100)
    print('{} + {}:'.format(str(a), str(b)))
    try:
        print('  checked    ', repr(a.checked_add(b)))
    except utils.LatticeError as e:
        print('  checked    ', type(e).__name__, str(e))
    print('  wrapping   ', repr(a.wrapping_add(b)))
    print('  saturating ', repr(a.saturating_add(b)))
    print('  overflowing', repr(a.overflowing_add(b)))
    for overflow in ('wrap', 'saturate'):
        policy_cls = integer.Integer.sized(ctx=ctx.let(props={'overflow': overflow}))
        print('  {:11}'.format(policy_cls.__name__), repr(policy_cls(100) + policy_cls(100)))
    print('-{} = {}'.format(repr(integer.PositiveInteger8(7)), repr(-integer.PositiveInteger8(7))))
    print('')

def show_rationals():
    x = rational.Rational8(2, 7)
    y = rational.Rational8(3, 8)
    print('{} + {} = {}'.format(str(x), str(y), str(x + y)))
    q = rational.Rational8(21, 98)
    print('{} reduced to {}, inverted to {}'.format(str(q), str(q.reduced()), str(q.inverted())))
    try:
        print(str(rational.Rational8(100, 3) * rational.Rational8(100, 7)))
    except utils.NarrowingError as e:
        print(type(e).__name__, str(e), file=sys.stderr)
    print('')


if __name__ == '__main__':
    show_kinds()
    show_conversions()
    show_arithmetic()
    show_rationals()
