#
# Addition, subtraction, multiplication and division of Binary32 encodings.
#
# Finite operands are unpacked to an integer significand and a power of two and the
# operation is carried out exactly on the significand digits.  The result is then cut
# to the format width: sums and products are truncated, while quotients carry one
# extra bit and round to nearest on it.  Results too small for a normal number become
# subnormal; results too large become infinity.
#

from .context import get_context, InvalidInput, InvalidEncoding
from .fixedpoint import add
from .ieee754 import (
    IEEE754Format, IEEE754Number, to_ieee754_number, make_zero, make_infinity, make_nan,
    _binary_special, POS_ZERO, NEG_ZERO, POS_INF, NEG_INF, QNAN, SNAN,
)
from .numeral import MINUS, PLUS, NumberType, Numeral


__all__ = ('add_binary32', 'subtract_binary32', 'multiply_binary32', 'divide_binary32')


BINARY32 = IEEE754Format.BINARY32
SIGNIFICAND_BITS = 24
FRACTION_MASK = (1 << (SIGNIFICAND_BITS - 1)) - 1
# Bias plus the number of fraction bits
SIGNIFICAND_BIAS = 150
MAX_BIASED_EXPONENT = 255


def _operand(value, source, log):
    if isinstance(value, IEEE754Number):
        if value.format != BINARY32:
            return InvalidEncoding(source, f'{value} is not a bin32 encoding').signal(log)
        return value
    if not isinstance(value, str) or not value.strip():
        return InvalidInput(source, 'missing operand').signal(log)
    return to_ieee754_number(value, BINARY32, log)


def _operands(lhs, rhs, source, log):
    lhs = _operand(lhs, source, log)
    if lhs is None:
        return None
    rhs = _operand(rhs, source, log)
    if rhs is None:
        return None
    return lhs, rhs


def _is_nan(number):
    return _binary_special(number) in (QNAN, SNAN)


def _is_infinite(number):
    return _binary_special(number) in (POS_INF, NEG_INF)


def _is_zero(number):
    return _binary_special(number) in (POS_ZERO, NEG_ZERO)


def _negative(number):
    return number.sign == '1'


def _unpack(number):
    '''Return (negative, significand, exponent) with the value significand x 2^exponent.'''
    biased = int(number.exponent, 2)
    fraction = int(number.significand, 2)
    if biased:
        return (_negative(number), (1 << (SIGNIFICAND_BITS - 1)) | fraction,
                biased - SIGNIFICAND_BIAS)
    return _negative(number), fraction, 1 - SIGNIFICAND_BIAS


def _pack(negative, significand, exponent, source, log, rounded=False):
    '''Fit significand x 2^exponent into a Binary32 encoding.  Bits below the format
    width are dropped; if rounded is set the first dropped bit rounds the result to
    nearest.'''
    shift = significand.bit_length() - SIGNIFICAND_BITS
    biased = exponent + shift + SIGNIFICAND_BIAS
    if biased < 1:
        shift += 1 - biased
        biased = 0

    if shift > 0:
        kept = significand >> shift
        if rounded and (significand >> (shift - 1)) & 1:
            kept += 1
    else:
        kept = significand << -shift

    if kept == 1 << SIGNIFICAND_BITS:
        kept >>= 1
        biased += 1
    if biased == 0 and kept >> (SIGNIFICAND_BITS - 1):
        biased = 1
    if biased >= MAX_BIASED_EXPONENT:
        get_context().warn(source, 'result overflows to infinity', log)
        return make_infinity(BINARY32, negative)
    if not kept:
        return make_zero(BINARY32, negative)
    return IEEE754Number('1' if negative else '0', format(biased, '08b'),
                         format(kept & FRACTION_MASK, '023b'), BINARY32)


def _step(log, text):
    if log:
        get_context().step(text)


def add_binary32(lhs, rhs, log=True):
    '''Return the sum of two Binary32 values.

    The significands are aligned to the smaller exponent and added as signed binary
    numerals.  An exact zero sum is +0 unless both operands are -0.
    '''
    source = 'add_binary32'
    operands = _operands(lhs, rhs, source, log)
    if operands is None:
        return None
    lhs, rhs = operands

    if _is_nan(lhs) or _is_nan(rhs):
        return make_nan(BINARY32)
    if _is_infinite(lhs) and _is_infinite(rhs):
        if lhs.sign != rhs.sign:
            return make_nan(BINARY32)
        return lhs
    if _is_infinite(lhs):
        return lhs
    if _is_infinite(rhs):
        return rhs
    if _is_zero(lhs) and _is_zero(rhs):
        return make_zero(BINARY32, _negative(lhs) and _negative(rhs))

    lhs_negative, lhs_significand, lhs_exponent = _unpack(lhs)
    rhs_negative, rhs_significand, rhs_exponent = _unpack(rhs)
    exponent = min(lhs_exponent, rhs_exponent)
    addends = [Numeral(MINUS if negative else PLUS,
                       format(significand << (unpacked_exponent - exponent), 'b'), '', 2,
                       NumberType.SIGNED)
               for negative, significand, unpacked_exponent in (
                   (lhs_negative, lhs_significand, lhs_exponent),
                   (rhs_negative, rhs_significand, rhs_exponent))]
    _step(log, f'aligned to 2^{exponent}: {addends[0].to_signed()} + {addends[1].to_signed()}')
    total = add(addends[0], addends[1], True, log)
    if total is None:
        return None
    _step(log, f'sum: {total.to_signed()} x 2^{exponent}')

    significand = int(total.whole, 2)
    if not significand:
        return make_zero(BINARY32)
    return _pack(total.sign == MINUS, significand, exponent, source, log)


def subtract_binary32(lhs, rhs, log=True):
    '''Return lhs - rhs, computed as lhs + (-rhs).'''
    operands = _operands(lhs, rhs, 'subtract_binary32', log)
    if operands is None:
        return None
    lhs, rhs = operands
    if not _is_nan(rhs):
        rhs = rhs._replace(sign='0' if _negative(rhs) else '1')
    return add_binary32(lhs, rhs, log)


def _multiply_significands(lhs, rhs, log):
    '''Schoolbook multiplication: add lhs shifted left by i for each set bit i of rhs.'''
    product = Numeral('', '0', '', 2, NumberType.UNSIGNED)
    lhs_bits = format(lhs, 'b')
    for index, bit in enumerate(reversed(format(rhs, 'b'))):
        if bit == '1':
            product = add(product, Numeral('', lhs_bits + '0' * index, '', 2,
                                           NumberType.UNSIGNED), True, log)
            if product is None:
                return None
    return int(product.whole, 2)


def multiply_binary32(lhs, rhs, log=True):
    '''Return the product of two Binary32 values.'''
    source = 'multiply_binary32'
    operands = _operands(lhs, rhs, source, log)
    if operands is None:
        return None
    lhs, rhs = operands
    negative = _negative(lhs) != _negative(rhs)

    if _is_nan(lhs) or _is_nan(rhs):
        return make_nan(BINARY32)
    if _is_infinite(lhs) or _is_infinite(rhs):
        if _is_zero(lhs) or _is_zero(rhs):
            return make_nan(BINARY32)
        return make_infinity(BINARY32, negative)
    if _is_zero(lhs) or _is_zero(rhs):
        return make_zero(BINARY32, negative)

    _, lhs_significand, lhs_exponent = _unpack(lhs)
    _, rhs_significand, rhs_exponent = _unpack(rhs)
    significand = _multiply_significands(lhs_significand, rhs_significand, log)
    if significand is None:
        return None
    exponent = lhs_exponent + rhs_exponent
    _step(log, f'product: {significand:b} x 2^{exponent}')
    return _pack(negative, significand, exponent, source, log)


def _divide_significands(numerator, denominator):
    '''Restoring division one bit at a time.  Returns (quotient, remainder).'''
    quotient = remainder = 0
    for bit in format(numerator, 'b'):
        remainder = (remainder << 1) | int(bit)
        quotient <<= 1
        if remainder >= denominator:
            remainder -= denominator
            quotient |= 1
    return quotient, remainder


def divide_binary32(lhs, rhs, log=True):
    '''Return the quotient of two Binary32 values.  Division of a finite nonzero value by
    zero gives a signed infinity and a warning.'''
    source = 'divide_binary32'
    operands = _operands(lhs, rhs, source, log)
    if operands is None:
        return None
    lhs, rhs = operands
    negative = _negative(lhs) != _negative(rhs)

    if _is_nan(lhs) or _is_nan(rhs):
        return make_nan(BINARY32)
    if _is_infinite(lhs) and _is_infinite(rhs):
        return make_nan(BINARY32)
    if _is_zero(lhs) and _is_zero(rhs):
        return make_nan(BINARY32)
    if _is_infinite(lhs):
        return make_infinity(BINARY32, negative)
    if _is_zero(rhs):
        get_context().warn(source, 'division by zero', log)
        return make_infinity(BINARY32, negative)
    if _is_zero(lhs) or _is_infinite(rhs):
        return make_zero(BINARY32, negative)

    _, lhs_significand, lhs_exponent = _unpack(lhs)
    _, rhs_significand, rhs_exponent = _unpack(rhs)
    # Scale so the quotient has at least one bit beyond the significand for rounding
    scale = max(0, SIGNIFICAND_BITS + 1 + rhs_significand.bit_length()
                - lhs_significand.bit_length())
    quotient, remainder = _divide_significands(lhs_significand << scale, rhs_significand)
    exponent = lhs_exponent - rhs_exponent - scale
    _step(log, f'quotient: {quotient:b} x 2^{exponent}, remainder {remainder:b}')
    return _pack(negative, quotient, exponent, source, log, rounded=True)
