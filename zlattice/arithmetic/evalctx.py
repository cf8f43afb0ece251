"""Evaluation context information, shared across refined kinds."""

from ..lattice import widths
from ..lattice.ops import OF


int8_synonyms = {'int8', 'int8_t', 'char', 'i8', '8'}
int16_synonyms = {'int16', 'int16_t', 'short', 'i16', '16'}
int32_synonyms = {'int32', 'int32_t', 'int', 'i32', '32'}
int64_synonyms = {'int64', 'int64_t', 'long', 'i64', '64'}
int128_synonyms = {'int128', 'int128_t', 'i128', '128'}
big_synonyms = {'big', 'bigint', 'integer', 'unbounded', 'mpz'}

checked_synonyms = {'checked', 'trap', 'strict', 'panic'}
clamp_synonyms = {'clamp', 'saturate', 'saturating'}
wrap_synonyms = {'wrap', 'wrapping', 'modular'}


INT_widths = {}
INT_widths.update((k, widths.W8) for k in int8_synonyms)
INT_widths.update((k, widths.W16) for k in int16_synonyms)
INT_widths.update((k, widths.W32) for k in int32_synonyms)
INT_widths.update((k, widths.W64) for k in int64_synonyms)
INT_widths.update((k, widths.W128) for k in int128_synonyms)
INT_widths.update((k, widths.BIG) for k in big_synonyms)

INT_of = {}
INT_of.update((k, OF.CHECKED) for k in checked_synonyms)
INT_of.update((k, OF.CLAMP) for k in clamp_synonyms)
INT_of.update((k, OF.WRAP) for k in wrap_synonyms)


def _lookup(table, key, what):
    try:
        return table[str(key).lower()]
    except KeyError:
        raise ValueError('unsupported {} {}'.format(what, repr(key)))

def parse_props(props, width=widths.W64, of=OF.CHECKED):
    """Width and overflow policy named by a props dictionary, falling back to
    the given ones for anything the props leave out.
    """
    if 'precision' in props:
        width = _lookup(INT_widths, props['precision'], 'integer precision')
    if 'overflow' in props:
        of = _lookup(INT_of, props['overflow'], 'overflow mode')
    return width, of


class IntCtx(object):
    """Context for refined integer arithmetic: a width and an overflow policy.

    Both can be given directly, or named in props with the keys 'precision'
    and 'overflow' (see the synonym tables above). Arguments override props.
    """

    width = widths.W64
    of = OF.CHECKED

    def __init__(self, props=None, width=None, of=None):
        self.props = dict(props) if props else {}
        self._set_fields(self.props, width, of)

    def _set_fields(self, props, width, of):
        init_width, init_of = parse_props(props, self.width, self.of)
        self.width = init_width if width is None else widths.width_of(width)
        self.of = init_of if of is None else OF(of)

    def let(self, props=None, width=None, of=None):
        """Create a new context, updated with any provided properties or fields."""
        cls = type(self)
        newctx = cls.__new__(cls)
        newctx.width = self.width
        newctx.of = self.of

        if props:
            newctx.props = self.props.copy()
            newctx.props.update(props)
        else:
            # share the dictionary
            newctx.props = self.props

        newctx._set_fields(props or {}, width, of)
        return newctx

    def __repr__(self):
        args = ['width=' + repr(self.width), 'of=OF.' + self.of.name]
        if len(self.props) > 0:
            args.append('props=' + repr(self.props))
        return '{}({})'.format(type(self).__name__, ', '.join(args))

    def __eq__(self, other):
        if not isinstance(other, IntCtx):
            return NotImplemented
        return self.width is other.width and self.of == other.of

    def __hash__(self):
        return hash((self.width.rank, int(self.of)))


used_ctxs = {}
def int_ctx(width=widths.W64, of=OF.CHECKED):
    width = widths.width_of(width)
    of = OF(of)
    try:
        return used_ctxs[(width.rank, of)]
    except KeyError:
        ctx = IntCtx(width=width, of=of)
        used_ctxs[(width.rank, of)] = ctx
        return ctx

def canonical(ctx):
    """The cached context with the same width and overflow policy as ctx."""
    return int_ctx(ctx.width, ctx.of)
