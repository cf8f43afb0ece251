import pytest

from zlattice.lattice import utils
from zlattice.lattice.utils import Reason


class TestTaxonomy:

    def test_every_reason_has_a_class(self):
        for reason in Reason:
            assert utils.error_classes[reason].reason is reason

    def test_invariant_reasons_are_distinct(self):
        classes = [utils.ZeroError, utils.ZeroOrMoreError, utils.ZeroOrLessError,
                   utils.LessThanZeroError, utils.MoreThanZeroError]
        assert len(set(cls.reason for cls in classes)) == 5
        for cls in classes:
            assert issubclass(cls, utils.InvariantError)
            assert issubclass(cls, ValueError)
            for other in classes:
                if other is not cls:
                    assert not issubclass(cls, other)

    def test_builtin_bases(self):
        assert issubclass(utils.Overflow, ArithmeticError)
        assert issubclass(utils.Underflow, utils.NarrowingError)
        assert issubclass(utils.ZeroDenominatorError, ZeroDivisionError)
        assert issubclass(utils.ZeroDivisorError, ZeroDivisionError)
        assert issubclass(utils.ConversionError, TypeError)
        assert not issubclass(utils.ZeroDenominatorError, utils.ZeroDivisorError)

    def test_error_for(self):
        e = utils.error_for(Reason.OVERFLOW, 'too big')
        assert isinstance(e, utils.Overflow)
        assert e.reason == Reason.OVERFLOW
        assert str(e) == 'too big'
        with pytest.raises(ValueError):
            utils.error_for(99, 'no such reason')


class TestImmutableDict:

    def test_cannot_modify(self):
        d = utils.ImmutableDict({'a': 1})
        assert d['a'] == 1
        with pytest.raises(ValueError):
            d['b'] = 2
        with pytest.raises(ValueError):
            del d['a']
        with pytest.raises(ValueError):
            d.update({'c': 3})
        assert d == {'a': 1}

    def test_in_place_union(self):
        d = utils.ImmutableDict({'a': 1})
        with pytest.raises(ValueError):
            d |= {'b': 2}
        with pytest.raises(ValueError):
            d.setdefault('b', 2)
        assert d == {'a': 1}

    def test_error_table_is_fixed(self):
        with pytest.raises(ValueError):
            utils.error_classes[Reason.ZERO] = utils.Overflow
        assert utils.error_classes[Reason.ZERO] is utils.ZeroError
