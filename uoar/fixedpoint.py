#
# Digit-string arithmetic on numerals: complement, absolute value, comparison,
# addition, shifts of register groups and single-digit adjustments.
#

from enum import IntEnum

from .context import (
    InvalidInput, InvalidNumber, IncompatibleOperands, UnsupportedOperation, Underflow,
)
from .numeral import (
    DIGITS, DIGIT_VALUES, PLUS, MINUS, NumberType, Numeral,
    top_digit, is_complement_kind, sign_multiplier, is_valid_numeral, standardize,
    trim_number, pad_whole_to, equalize_length, _digits_below,
)


__all__ = ('Compare', 'ShiftType',
           'complement', 'absolute_value', 'compare_magnitude', 'compare', 'is_zero',
           'add', 'shift', 'add_to_lowest_point')


# Three-way result of comparisons.
class Compare(IntEnum):
    LESS_THAN = 0
    EQUAL = 1
    GREATER_THAN = 2


class ShiftType(IntEnum):
    LEFT = 0
    # Shift in zeroes at the top
    RIGHT_LOGICAL = 1
    # Replicate the leading sign digit at the top
    RIGHT_ARITHMETIC = 2


##
## Helpers on plain digit strings, most significant digit first.
##

def _int_to_digits(value, radix):
    '''Return the digits of a non-negative integer.'''
    digits = []
    while value:
        value, digit = divmod(value, radix)
        digits.append(DIGITS[digit])
    return ''.join(reversed(digits)) or '0'


def _add_at_lowest(digits, radix, delta):
    '''Add delta at the least significant digit.  Returns a (digits, carry) pair where digits
    has the same length and carry is what propagated out of the top (possibly negative).'''
    values = [DIGIT_VALUES[char] for char in digits]
    carry = delta
    for index in range(len(values) - 1, -1, -1):
        if not carry:
            break
        carry, values[index] = divmod(values[index] + carry, radix)
    return ''.join(DIGITS[value] for value in values), carry


def _add_digits(lhs, rhs, radix):
    '''Add two digit strings of equal length.  Returns a (digits, carry) pair.'''
    result = []
    carry = 0
    for a, b in zip(reversed(lhs), reversed(rhs)):
        carry, digit = divmod(DIGIT_VALUES[a] + DIGIT_VALUES[b] + carry, radix)
        result.append(DIGITS[digit])
    return ''.join(reversed(result)), carry


def _subtract_digits(lhs, rhs, radix):
    '''Subtract two digit strings of equal length; lhs must not be less than rhs.'''
    result = []
    borrow = 0
    for a, b in zip(reversed(lhs), reversed(rhs)):
        difference = DIGIT_VALUES[a] - DIGIT_VALUES[b] - borrow
        borrow = 1 if difference < 0 else 0
        result.append(DIGITS[difference + borrow * radix])
    return ''.join(reversed(result))


def _extend_sign_run(sign, carry, radix):
    '''The sign digit of a complement-kind numeral stands for an unbounded run of itself.
    Add carry into that run; return the digits that break out of it and the digit of the
    run afterwards.'''
    value = DIGIT_VALUES[sign]
    prefix = ''
    while carry:
        next_carry, digit = divmod(value + carry, radix)
        if next_carry == carry:
            # Every further position behaves the same: the whole run becomes digit
            return prefix, DIGITS[digit]
        prefix = DIGITS[digit] + prefix
        carry = next_carry
    return prefix, sign


def _sign_token(kind, radix, negative):
    if kind == NumberType.SIGNED:
        return MINUS if negative else PLUS
    if kind == NumberType.UNSIGNED:
        return ''
    return top_digit(radix) if negative else '0'


def _split(numeral, digits, fraction_length):
    '''Set whole and fraction of numeral from a digit string, in place.'''
    point = len(digits) - fraction_length
    numeral.whole = digits[:point]
    numeral.fraction = digits[point:]
    return numeral


def _prepare(numeral, standardized, source, log):
    '''Return a standardized copy of numeral, or a plain copy if it is standardized.'''
    if not isinstance(numeral, Numeral):
        return InvalidInput(source, 'missing operand').signal(log)
    if standardized:
        if not is_valid_numeral(numeral):
            return InvalidNumber(source, f'invalid operand {numeral}').signal(log)
        return numeral.copy()
    return standardize(numeral, log)


def is_zero(numeral):
    '''True if every digit of the numeral is zero, whatever its sign.'''
    return not (numeral.whole + numeral.fraction).strip('0')


##
## Complement and absolute value
##

def complement(numeral, standardized=False, log=True):
    '''Return the complement of numeral.  SIGNED and SMR numerals have their sign flipped.
    OC numerals have every digit d, sign included, replaced by radix - 1 - d; TC numerals
    additionally have 1 added at the lowest digit.  UNSIGNED numerals cannot be
    complemented.'''
    if isinstance(numeral, Numeral) and numeral.kind == NumberType.UNSIGNED:
        return UnsupportedOperation('complement', 'cannot complement an unsigned number'
                                    ).signal(log)
    value = _prepare(numeral, standardized, 'complement', log)
    if value is None:
        return None

    radix = value.radix
    if value.kind == NumberType.SIGNED:
        value.sign = _sign_token(value.kind, radix, sign_multiplier(value) == 1)
    elif value.kind == NumberType.SMR:
        value.sign = _sign_token(value.kind, radix, value.sign[0] == '0')
    else:
        sign_length = len(value.sign)
        digits = ''.join(DIGITS[radix - 1 - DIGIT_VALUES[char]]
                         for char in value.sign[0] + value.sign + value.whole + value.fraction)
        if value.kind == NumberType.TC:
            # The carry out of the sign digits is dropped
            digits, _ = _add_at_lowest(digits, radix, 1)
        # The extra sign digit is kept only when the magnitude outgrew the whole part
        if digits[0] == digits[1]:
            digits = digits[1:]
        value.sign = digits[:sign_length]
        _split(value, digits[sign_length:], len(value.fraction))
    return value


def absolute_value(numeral, standardized=False, log=True):
    '''Return the magnitude of numeral in its own kind.'''
    value = _prepare(numeral, standardized, 'absolute_value', log)
    if value is None:
        return None
    if value.kind in (NumberType.SIGNED, NumberType.SMR):
        value.sign = _sign_token(value.kind, value.radix, False)
    elif is_complement_kind(value.kind) and sign_multiplier(value) == -1:
        value = complement(value, True, log)
    return value


##
## Comparison
##

def _check_compatible(lhs, rhs, source, log):
    if not isinstance(lhs, Numeral) or not isinstance(rhs, Numeral):
        return InvalidInput(source, 'missing operand', False).signal(log)
    if lhs.radix != rhs.radix:
        return IncompatibleOperands(source, 'numbers are in different bases', False
                                    ).signal(log)
    if lhs.kind != rhs.kind:
        return IncompatibleOperands(source, 'numbers are of different types', False
                                    ).signal(log)
    return True


def compare_magnitude(lhs, rhs, standardized=False, log=True):
    '''Compare the digits of two numerals of the same radix and kind, whole part first,
    ignoring their signs.'''
    if not _check_compatible(lhs, rhs, 'compare_magnitude', log):
        return None
    lhs, rhs = lhs.copy(), rhs.copy()
    if not equalize_length(lhs, rhs, standardized, log):
        return None
    # Digit characters sort in the order of their values
    lhs_digits = lhs.whole + lhs.fraction
    rhs_digits = rhs.whole + rhs.fraction
    if lhs_digits < rhs_digits:
        return Compare.LESS_THAN
    if lhs_digits > rhs_digits:
        return Compare.GREATER_THAN
    return Compare.EQUAL


def compare(lhs, rhs, standardized=False, log=True):
    '''Compare the values of two numerals of the same radix and kind.'''
    if not _check_compatible(lhs, rhs, 'compare', log):
        return None
    lhs_abs = absolute_value(lhs, standardized, log)
    rhs_abs = absolute_value(rhs, standardized, log)
    if lhs_abs is None or rhs_abs is None:
        return None
    lhs_sign = sign_multiplier(lhs, standardized)
    rhs_sign = sign_multiplier(rhs, standardized)
    order = compare_magnitude(lhs_abs, rhs_abs, True, log)

    if lhs_sign == rhs_sign:
        if lhs_sign > 0:
            return order
        return Compare(2 - order)
    if is_zero(lhs_abs) and is_zero(rhs_abs):
        return Compare.EQUAL
    return Compare.GREATER_THAN if lhs_sign > 0 else Compare.LESS_THAN


##
## Addition
##

def add(lhs, rhs, standardized=False, log=True):
    '''Return the sum of two numerals of the same radix and kind.

    A carry out of the whole part lengthens the result; callers needing a fixed width
    must truncate it themselves.  Complement-kind operands are extended by one sign digit
    first so the sum cannot overflow; one's complement adds the end-around carry.
    '''
    if not _check_compatible(lhs, rhs, 'add', log):
        return None
    if standardized and not (is_valid_numeral(lhs) and is_valid_numeral(rhs)):
        return InvalidNumber('add', 'invalid operand').signal(log)
    lhs, rhs = lhs.copy(), rhs.copy()
    if not equalize_length(lhs, rhs, standardized, log):
        return None

    radix = lhs.radix
    kind = lhs.kind
    fraction_length = len(lhs.fraction)
    result = Numeral(lhs.sign, '', '', radix, kind)

    if kind == NumberType.UNSIGNED:
        digits, carry = _add_digits(lhs.whole + lhs.fraction, rhs.whole + rhs.fraction, radix)
        _split(result, digits, fraction_length)
        if carry:
            result.whole = _int_to_digits(carry, radix) + result.whole
    elif kind in (NumberType.SIGNED, NumberType.SMR):
        lhs_negative = sign_multiplier(lhs) == -1
        rhs_negative = sign_multiplier(rhs) == -1
        lhs_digits = lhs.whole + lhs.fraction
        rhs_digits = rhs.whole + rhs.fraction
        if lhs_negative == rhs_negative:
            digits, carry = _add_digits(lhs_digits, rhs_digits, radix)
            negative = lhs_negative
        elif lhs_digits >= rhs_digits:
            digits, carry = _subtract_digits(lhs_digits, rhs_digits, radix), 0
            negative = lhs_negative
        else:
            digits, carry = _subtract_digits(rhs_digits, lhs_digits, radix), 0
            negative = rhs_negative
        _split(result, digits, fraction_length)
        if carry:
            result.whole = _int_to_digits(carry, radix) + result.whole
        result.sign = _sign_token(kind, radix, negative and not is_zero(result))
    else:
        for operand in (lhs, rhs):
            operand.sign = operand.sign[0]
            pad_whole_to(operand, len(operand.whole) + 1, log)
        digits, carry = _add_digits(lhs.sign + lhs.whole + lhs.fraction,
                                    rhs.sign + rhs.whole + rhs.fraction, radix)
        if kind == NumberType.OC and carry:
            digits, _ = _add_at_lowest(digits, radix, carry)
        result.sign = digits[0]
        _split(result, digits[1:], fraction_length)

    return trim_number(result)


##
## Shifts and lowest-digit adjustment
##

def shift(registers, positions, shift_type, log=True):
    '''Shift the digits of a list of registers, read as one digit string (sign, whole and
    fraction of each in turn), by positions digits.  The registers are modified in place
    and keep their lengths.  Returns True on success; on failure the registers are left
    unchanged.

    RIGHT_ARITHMETIC replicates the first register's sign digit into the vacated top
    positions, RIGHT_LOGICAL shifts in zeroes there, and LEFT shifts zeroes in at the
    bottom and discards digits from the top.
    '''
    if not registers or not isinstance(positions, int) or positions < 0:
        return InvalidInput('shift', 'nothing to shift', False).signal(log)
    radix = registers[0].radix if isinstance(registers[0], Numeral) else None
    for register in registers:
        if not isinstance(register, Numeral) or register.kind == NumberType.SIGNED:
            return InvalidNumber('shift', 'registers must be positional numbers', False
                                 ).signal(log)
        if register.radix != radix:
            return IncompatibleOperands('shift', 'registers are in different bases', False
                                        ).signal(log)
        if not _digits_below(register.sign + register.whole + register.fraction, radix):
            return InvalidNumber('shift', f'invalid register {register}', False).signal(log)

    line = ''.join(register.sign + register.whole + register.fraction
                   for register in registers)
    length = len(line)
    if shift_type == ShiftType.RIGHT_ARITHMETIC:
        fill = (registers[0].sign or line or '0')[0]
        line = (fill * positions + line)[:length]
    elif shift_type == ShiftType.RIGHT_LOGICAL:
        line = ('0' * positions + line)[:length]
    elif shift_type == ShiftType.LEFT:
        line = (line + '0' * positions)[positions:]
    else:
        return InvalidInput('shift', f'unknown shift type {shift_type!r}', False).signal(log)

    start = 0
    for register in registers:
        for field in ('sign', 'whole', 'fraction'):
            end = start + len(getattr(register, field))
            setattr(register, field, line[start:end])
            start = end
    return True


def add_to_lowest_point(numeral, delta, standardized=False, log=True):
    '''Add the integer delta at the least significant digit of numeral and return the
    result.  Carries run through the fraction and whole; for complement kinds they continue
    into the sign, growing the number rather than wrapping.  A borrow past the top digit
    of a non-complement numeral is an error.'''
    value = _prepare(numeral, standardized, 'add_to_lowest_point', log)
    if value is None:
        return None

    radix = value.radix
    fraction_length = len(value.fraction)
    if is_complement_kind(value.kind):
        sign = value.sign[0]
        digits, carry = _add_at_lowest(sign + value.whole + value.fraction, radix, delta)
        prefix, value.sign = _extend_sign_run(sign, carry, radix)
        _split(value, prefix + digits, fraction_length)
    else:
        digits, carry = _add_at_lowest(value.whole + value.fraction, radix, delta)
        if carry < 0:
            return Underflow('add_to_lowest_point', f'{numeral} is less than {-delta}'
                             ).signal(log)
        _split(value, digits, fraction_length)
        if carry:
            value.whole = _int_to_digits(carry, radix) + value.whole
    return trim_number(value)
