import pytest

from uoar import *
from uoar.algorithms import _recode_radix4


def decimal(text):
    sign, whole, fraction = text[0], *text[1:].partition('.')[::2]
    return Numeral(sign, whole, fraction, 10, NumberType.SIGNED)


class TestMultiply:

    @pytest.mark.parametrize('lhs, rhs, product', (
        (70, 51, '+3570'),
        ('2.5', '1.5', '+3.75'),
        (0, 5, '+0'),
        (13, 11, '+143'),
        ('0.5', '0.5', '+0.25'),
    ))
    def test_unsigned(self, lhs, rhs, product):
        assert multiply_unsigned(lhs, rhs) == decimal(product)

    @pytest.mark.parametrize('lhs, rhs, product', (
        (3, -4, '-12'),
        ('1.5', '-2', '-3'),
        ('-3', '-4', '+12'),
        (7, 6, '+42'),
        (-8, 1, '-8'),
        (0, -7, '+0'),
    ))
    def test_booth(self, lhs, rhs, product):
        assert multiply_booth(lhs, rhs) == decimal(product)

    @pytest.mark.parametrize('lhs, rhs, product', (
        (3, -4, '-12'),
        (7, 6, '+42'),
        (-5, -3, '+15'),
        ('+9', '+1', '+9'),
    ))
    def test_modified_booth(self, lhs, rhs, product):
        assert multiply_modified_booth(lhs, rhs) == decimal(product)

    def test_unsigned_negative(self, context):
        assert multiply_unsigned(-3, 2) is None
        assert isinstance(context.last_error, InvalidInput)

    @pytest.mark.parametrize('operation', (multiply_unsigned, multiply_booth,
                                           multiply_modified_booth))
    @pytest.mark.parametrize('lhs, exc_class', (
        ('', InvalidInput),
        (None, InvalidInput),
        ('12A', InvalidNumber),
    ))
    def test_invalid(self, operation, lhs, exc_class, context):
        assert operation(lhs, 3) is None
        assert isinstance(context.last_error, exc_class)

    def test_raises(self, raising_context):
        with pytest.raises(InvalidNumber):
            multiply_booth('x', 3)


class TestRecode:

    @pytest.mark.parametrize('bits, digits', (
        ('000110', [0, 2, -2]),
        ('1100', [-1, 0]),
        ('0111', [2, -1]),
        ('10', [-2]),
    ))
    def test_recode(self, bits, digits):
        assert _recode_radix4(bits) == digits


class TestDivide:

    @pytest.mark.parametrize('dividend, divisor, quotient, remainder', (
        (131, 12, '+10', '+11'),
        (12, 131, '+0', '+12'),
        (0, 3, '+0', '+0'),
        (255, 1, '+255', '+0'),
        ('100', '10', '+10', '+0'),
    ))
    def test_unsigned(self, dividend, divisor, quotient, remainder):
        result = divide_unsigned(dividend, divisor)
        assert isinstance(result, DivisionResult)
        assert result.quotient == decimal(quotient)
        assert result.remainder == decimal(remainder)

    @pytest.mark.parametrize('dividend, divisor, quotient, remainder', (
        (-131, 12, '-10', '-11'),
        (131, -12, '-10', '+11'),
        (-131, -12, '+10', '-11'),
        (-5, 7, '+0', '-5'),
        (-12, 4, '-3', '+0'),
        (-12, -4, '+3', '+0'),
        (-1, 1, '-1', '+0'),
        (-8, 1, '-8', '+0'),
        (7, -2, '-3', '+1'),
        (-7, 2, '-3', '-1'),
        (6, 3, '+2', '+0'),
    ))
    def test_signed(self, dividend, divisor, quotient, remainder):
        assert divide_signed(dividend, divisor) == (decimal(quotient), decimal(remainder))

    @pytest.mark.parametrize('operation', (divide_unsigned, divide_signed))
    def test_division_by_zero(self, operation, context):
        assert operation(7, 0) is None
        assert isinstance(context.last_error, DivisionByZero)

    @pytest.mark.parametrize('operation', (divide_unsigned, divide_signed))
    def test_fraction(self, operation, context):
        assert operation('7.5', 2) is None
        assert isinstance(context.last_error, InvalidInput)

    def test_unsigned_negative(self, context):
        assert divide_unsigned(-7, 2) is None
        assert isinstance(context.last_error, InvalidInput)

    def test_division_by_zero_raises(self, raising_context):
        with pytest.raises(ZeroDivisionError):
            divide_signed(1, '-0')


class TestSteps:

    @pytest.mark.parametrize('operation', (multiply_unsigned, multiply_booth,
                                           multiply_modified_booth, divide_unsigned,
                                           divide_signed))
    def test_steps_recorded(self, operation):
        with local_context(Context(record_steps=True)) as context:
            operation(6, 3)
            assert context.steps
            assert context.steps[0].startswith('M = ')

    def test_steps_not_logged(self):
        with local_context(Context(record_steps=True)) as context:
            assert multiply_booth(3, -4, log=False) == decimal('-12')
            assert not context.steps

    def test_booth_operations(self):
        with local_context(Context(record_steps=True)) as context:
            multiply_booth(3, 5)
            assert any('A = A - M' in step for step in context.steps)
            assert any('A = A + M' in step for step in context.steps)

    def test_restore(self):
        with local_context(Context(record_steps=True)) as context:
            divide_unsigned(131, 12)
            assert any('restore' in step for step in context.steps)

    @pytest.mark.parametrize('dividend, divisor, operation', (
        (-131, 12, 'A = A + M'),
        (131, -12, 'A = A + M'),
        (-131, -12, 'A = A - M'),
        (131, 12, 'A = A - M'),
    ))
    def test_signed_operation(self, dividend, divisor, operation):
        with local_context(Context(record_steps=True)) as context:
            divide_signed(dividend, divisor)
            assert operation in context.steps[0]
            assert any('A changed sign, restore' in step for step in context.steps[1:])
            assert all(operation in step for step in context.steps[1:]
                       if 'restore' not in step)

    def test_append_step(self):
        sink = []
        with local_context(Context(append_step=sink.append)):
            multiply_unsigned(3, 3)
        assert sink and sink[0].startswith('M = ')
