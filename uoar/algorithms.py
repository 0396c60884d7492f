#
# Register-level multiplication and division of binary fixed-point numbers.
#
# Operands are given in base 10, converted to binary registers, processed one
# register operation at a time and the result converted back to base 10.  Each
# register operation is reported as a step on the current context.
#

from typing import NamedTuple

from .base import to_decimal, from_decimal
from .context import get_context, InvalidInput, DivisionByZero
from .fixedpoint import ShiftType, add, complement, shift, is_zero
from .numeral import (
    MINUS, PLUS, NumberType, Numeral, parse, pad_whole_to, equalize_length, sign_multiplier,
)
from .representation import to_signed, to_twos_complement, to_unsigned


__all__ = ('DivisionResult', 'multiply_unsigned', 'multiply_booth',
           'multiply_modified_booth', 'divide_unsigned', 'divide_signed')


class DivisionResult(NamedTuple):
    '''Quotient and remainder of a division, both base 10 SIGNED numerals.'''
    quotient: Numeral
    remainder: Numeral


##
## Register helpers
##

def _parse_operand(value, source, log):
    '''Return a decimal operand as a standardized SIGNED base 10 numeral.'''
    if isinstance(value, int):
        value = str(value)
    if not isinstance(value, str) or not value.strip():
        return InvalidInput(source, 'missing operand').signal(log)
    text = value.strip()
    if text[0] not in (PLUS, MINUS):
        text = PLUS + text
    return parse(text, 10, NumberType.SIGNED, log)


def _binary_operands(lhs, rhs, source, log):
    '''Parse two decimal operands and convert them to SIGNED binary numerals.'''
    operands = []
    for value in (lhs, rhs):
        numeral = _parse_operand(value, source, log)
        if numeral is None:
            return None
        numeral = from_decimal(numeral, 2, False, log)
        if numeral is None:
            return None
        operands.append(numeral)
    return operands


def _register(bits, kind=NumberType.TC):
    '''A register holding bits.  TC registers keep the first bit in the sign field.'''
    if kind == NumberType.TC:
        return Numeral(bits[0], bits[1:], '', 2, kind)
    return Numeral('', bits, '', 2, kind)


def _bits(register):
    return register.sign + register.whole + register.fraction


def _truncate_register(numeral, width):
    '''Return a TC register of exactly width bits holding numeral, sign extended or with
    the top bits discarded.'''
    bits = _bits(numeral)
    if len(bits) < width:
        bits = numeral.sign[0] * (width - len(bits)) + bits
    return _register(bits[-width:])


def _add_register(register, addend, log):
    total = add(register, addend, True, log)
    if total is None:
        return None
    return _truncate_register(total, len(_bits(register)))


def _as_twos_complement(operands, log):
    '''Return SIGNED binary operands as TC numerals of equal shape, each extended by one
    sign bit so negating either cannot overflow.'''
    operands = [to_twos_complement(operand, True, log) for operand in operands]
    if None in operands or not equalize_length(*operands, True, log):
        return None
    for operand in operands:
        pad_whole_to(operand, len(operand.whole) + 1, log)
    return operands


def _twos_complement_operands(lhs, rhs, source, log):
    operands = _binary_operands(lhs, rhs, source, log)
    if operands is None:
        return None
    return _as_twos_complement(operands, log)


def _signed_decimal(bits, fraction_length, kind, log):
    '''Convert the bits of one or more registers to a SIGNED base 10 numeral.'''
    point = len(bits) - fraction_length
    if kind == NumberType.TC:
        value = Numeral(bits[0], bits[1:point], bits[point:], 2, kind)
    else:
        value = Numeral('', bits[:point], bits[point:], 2, kind)
    value = to_decimal(value, False, log)
    if value is None:
        return None
    return to_signed(value, True, log)


def _step(log, text):
    if log:
        get_context().step(text)


##
## Multiplication
##

def multiply_unsigned(multiplicand, multiplier, log=True):
    '''Multiply two non-negative decimal numbers with the shift-and-add algorithm on
    registers C (carry), A (accumulator) and P (multiplier).

    For each of the n multiplier bits, M is added into A when P's lowest bit is set, the
    carry out landing in C; then C, A and P are shifted right together.  The product is
    A and P read as one 2n-bit number.
    '''
    source = 'multiply_unsigned'
    operands = _binary_operands(multiplicand, multiplier, source, log)
    if operands is None:
        return None
    if any(sign_multiplier(operand) == -1 for operand in operands):
        return InvalidInput(source, 'operands must not be negative').signal(log)
    operands = [to_unsigned(operand, True, log) for operand in operands]
    if None in operands or not equalize_length(*operands, True, log):
        return None

    m_bits, q_bits = (_bits(operand) for operand in operands)
    fraction_length = len(operands[0].fraction)
    width = len(m_bits)
    C = _register('0', NumberType.UNSIGNED)
    A = _register('0' * width, NumberType.UNSIGNED)
    P = _register(q_bits, NumberType.UNSIGNED)
    M = _register(m_bits, NumberType.UNSIGNED)
    _step(log, f'M = {M.whole}, C = {C.whole}, A = {A.whole}, P = {P.whole}')

    for count in range(1, width + 1):
        if P.whole[-1] == '1':
            total = add(A, M, True, log)
            if total is None:
                return None
            digits = total.whole.zfill(width)
            C.whole, A.whole = (digits[:-width] or '0'), digits[-width:]
            _step(log, f'{count}: A = A + M: C = {C.whole}, A = {A.whole}')
        if not shift([C, A, P], 1, ShiftType.RIGHT_LOGICAL, log):
            return None
        _step(log, f'{count}: shift right: C = {C.whole}, A = {A.whole}, P = {P.whole}')

    return _signed_decimal(A.whole + P.whole, 2 * fraction_length, NumberType.UNSIGNED, log)


def multiply_booth(multiplicand, multiplier, log=True):
    '''Multiply two signed decimal numbers with Booth's algorithm.

    Registers A (accumulator) and P (multiplier) are two's complement; P-1 holds the bit
    last shifted out of P.  The lowest bit of P followed by P-1 selects the operation:
    10 subtracts M from A and 01 adds it.  A, P and P-1 are then shifted right
    arithmetically.
    '''
    source = 'multiply_booth'
    operands = _twos_complement_operands(multiplicand, multiplier, source, log)
    if operands is None:
        return None

    m_bits, q_bits = (_bits(operand) for operand in operands)
    fraction_length = len(operands[0].fraction)
    width = len(m_bits)
    M = _register(m_bits)
    negative_M = complement(M, True, log)
    if negative_M is None:
        return None
    A = _register('0' * width)
    P = _register(q_bits)
    P_1 = _register('0', NumberType.UNSIGNED)
    _step(log, f'M = {_bits(M)}, -M = {_bits(negative_M)}, A = {_bits(A)}, P = {_bits(P)}')

    for count in range(1, width + 1):
        operation = _bits(P)[-1] + P_1.whole
        if operation in ('10', '01'):
            A = _add_register(A, negative_M if operation == '10' else M, log)
            if A is None:
                return None
            _step(log, f'{count}: A = A {"-" if operation == "10" else "+"} M = {_bits(A)}')
        if not shift([A, P, P_1], 1, ShiftType.RIGHT_ARITHMETIC, log):
            return None
        _step(log, f'{count}: shift right: A = {_bits(A)}, P = {_bits(P)}, P-1 = {P_1.whole}')

    return _signed_decimal(_bits(A) + _bits(P), 2 * fraction_length, NumberType.TC, log)


def _recode_radix4(bits):
    '''Return the radix-4 Booth digits of a two's complement bit string of even length,
    most significant first.  Each pair q[i+1] q[i] with the bit q[i-1] below it gives
    -2 q[i+1] + q[i] + q[i-1].'''
    values = [int(bit) for bit in reversed(bits)]
    digits = []
    for index in range(0, len(bits), 2):
        below = values[index - 1] if index else 0
        digits.append(-2 * values[index + 1] + values[index] + below)
    return list(reversed(digits))


def multiply_modified_booth(multiplicand, multiplier, log=True):
    '''Multiply two signed decimal numbers with the modified (radix-4) Booth algorithm.

    The multiplier is recoded into digits in {-2, -1, 0, 1, 2}.  Working from the most
    significant digit, the product register is shifted left two bits and the digit times
    the multiplicand is added to it.
    '''
    source = 'multiply_modified_booth'
    operands = _twos_complement_operands(multiplicand, multiplier, source, log)
    if operands is None:
        return None

    m_bits, q_bits = (_bits(operand) for operand in operands)
    fraction_length = len(operands[0].fraction)
    if len(q_bits) % 2:
        q_bits = q_bits[0] + q_bits
    width = len(m_bits) + len(q_bits)

    M = _register(m_bits[0] * (width - len(m_bits)) + m_bits)
    M2 = M.copy()
    if not shift([M2], 1, ShiftType.LEFT, log):
        return None
    addends = {1: M, 2: M2, -1: complement(M, True, log), -2: complement(M2, True, log)}
    if None in addends.values():
        return None

    digits = _recode_radix4(q_bits)
    _step(log, f'M = {_bits(M)}, recoded multiplier = {digits}')
    P = _register('0' * width)
    for count, digit in enumerate(digits, start=1):
        if not shift([P], 2, ShiftType.LEFT, log):
            return None
        if digit:
            P = _add_register(P, addends[digit], log)
            if P is None:
                return None
        _step(log, f'{count}: P = 4P + ({digit})M = {_bits(P)}')

    return _signed_decimal(_bits(P), 2 * fraction_length, NumberType.TC, log)


##
## Division
##

def _integer_operands(dividend, divisor, source, log):
    '''Return the operands as SIGNED binary integers; fractions and a zero divisor are
    rejected.'''
    operands = _binary_operands(dividend, divisor, source, log)
    if operands is None:
        return None
    if any(operand.fraction for operand in operands):
        return InvalidInput(source, 'division operands must be integers').signal(log)
    if is_zero(operands[1]):
        return DivisionByZero(source, 'division by zero').signal(log)
    return operands


def _restoring_divide(dividend_bits, divisor_bits, log):
    '''Restoring division of two unsigned bit strings.  Returns the quotient and remainder
    registers.

    A starts at zero and Q holds the dividend.  Each of the n rounds shifts A and Q left
    together and subtracts M from A; if A went negative M is added back, otherwise the
    lowest bit of Q is set.
    '''
    width = max(len(dividend_bits), len(divisor_bits))
    A = _register('0' * (width + 1))
    Q = _register(dividend_bits.zfill(width), NumberType.UNSIGNED)
    M = _register(divisor_bits.zfill(width + 1))
    negative_M = complement(M, True, log)
    if negative_M is None:
        return None
    _step(log, f'M = {_bits(M)}, -M = {_bits(negative_M)}, A = {_bits(A)}, Q = {Q.whole}')

    for count in range(1, width + 1):
        if not shift([A, Q], 1, ShiftType.LEFT, log):
            return None
        A = _add_register(A, negative_M, log)
        if A is None:
            return None
        if A.sign == '1':
            A = _add_register(A, M, log)
            if A is None:
                return None
            _step(log, f'{count}: A - M < 0, restore: A = {_bits(A)}, Q = {Q.whole}')
        else:
            Q.whole = Q.whole[:-1] + '1'
            _step(log, f'{count}: A = A - M = {_bits(A)}, Q = {Q.whole}')
    return Q, A


def _decimal_result(register, negative, log):
    '''Convert a non-negative binary register to a SIGNED base 10 numeral.'''
    value = Numeral('', register.whole if register.kind == NumberType.UNSIGNED
                    else _bits(register), '', 2, NumberType.UNSIGNED)
    value = to_decimal(value, False, log)
    if value is None:
        return None
    value = to_signed(value, True, log)
    if value is not None and negative and not is_zero(value):
        value = complement(value, True, log)
    return value


def divide_unsigned(dividend, divisor, log=True):
    '''Divide two non-negative decimal integers with restoring division.  Returns a
    DivisionResult.'''
    source = 'divide_unsigned'
    operands = _integer_operands(dividend, divisor, source, log)
    if operands is None:
        return None
    if any(sign_multiplier(operand) == -1 for operand in operands):
        return InvalidInput(source, 'operands must not be negative').signal(log)

    registers = _restoring_divide(operands[0].whole, operands[1].whole, log)
    if registers is None:
        return None
    quotient = _decimal_result(registers[0], False, log)
    remainder = _decimal_result(registers[1], False, log)
    if quotient is None or remainder is None:
        return None
    return DivisionResult(quotient, remainder)


def _signed_restoring_divide(dividend_bits, divisor_bits, log):
    '''Restoring division of two two's complement bit strings of equal length.  Returns
    the quotient magnitude and the remainder registers.

    A starts as the sign extension of the dividend and P holds its bits.  When the
    dividend and M agree in sign every round uses A - M, otherwise A + M.  Each round
    shifts A and P left and applies the operation to A; if that changed the sign of the
    remainder M is added back, otherwise the lowest bit of P is set.  A remainder of
    exactly zero keeps the sign of a negative dividend.
    '''
    width = len(dividend_bits)
    negative = dividend_bits[0] == '1'
    A = _register(dividend_bits[0] * (width + 1))
    P = _register(dividend_bits, NumberType.UNSIGNED)
    M = _register(divisor_bits[0] + divisor_bits)
    negative_M = complement(M, True, log)
    if negative_M is None:
        return None
    if dividend_bits[0] == divisor_bits[0]:
        operation, restore, symbol = negative_M, M, '-'
        _step(log, f'M = {_bits(M)}, A = {_bits(A)}, P = {P.whole}; same signs: A = A - M')
    else:
        operation, restore, symbol = M, negative_M, '+'
        _step(log, f'M = {_bits(M)}, A = {_bits(A)}, P = {P.whole}; '
              'different signs: A = A + M')

    for count in range(1, width + 1):
        if not shift([A, P], 1, ShiftType.LEFT, log):
            return None
        A = _add_register(A, operation, log)
        if A is None:
            return None
        if negative:
            # The unshifted dividend bits are part of the remainder
            kept = A.sign == '1' or not (_bits(A) + P.whole[:width - count]).strip('0')
        else:
            kept = A.sign == '0'
        if kept:
            P.whole = P.whole[:-1] + '1'
            _step(log, f'{count}: A = A {symbol} M = {_bits(A)}, P = {P.whole}')
        else:
            A = _add_register(A, restore, log)
            if A is None:
                return None
            _step(log, f'{count}: A changed sign, restore: A = {_bits(A)}, P = {P.whole}')
    return P, A


def divide_signed(dividend, divisor, log=True):
    '''Divide two signed decimal integers with restoring division on two's complement
    registers.  The quotient is truncated towards zero and the remainder takes the sign
    of the dividend.  Returns a DivisionResult.'''
    source = 'divide_signed'
    operands = _integer_operands(dividend, divisor, source, log)
    if operands is None:
        return None
    negative = (sign_multiplier(operands[0]) == -1) != (sign_multiplier(operands[1]) == -1)
    operands = _as_twos_complement(operands, log)
    if operands is None:
        return None

    registers = _signed_restoring_divide(_bits(operands[0]), _bits(operands[1]), log)
    if registers is None:
        return None
    quotient = _decimal_result(registers[0], negative, log)
    remainder = _signed_decimal(_bits(registers[1]), 0, NumberType.TC, log)
    if quotient is None or remainder is None:
        return None
    return DivisionResult(quotient, remainder)
