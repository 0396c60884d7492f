#
# Conversion of numerals between radices through base 10, and the binary and
# packed BCD digit helpers the IEEE 754 codecs build on.
#
# Fractions pass through a fixed-point accumulator of PRECISION decimal digits, so
# conversions keep at most eight fractional decimal digits.
#

from .context import InvalidInput, InvalidRadix, InvalidDigit, InvalidNumber
from .fixedpoint import complement, _int_to_digits
from .numeral import (
    DIGITS, DIGIT_VALUES, PRECISION, PRECISION_NUMBER, NumberType, Numeral,
    top_digit, is_valid_radix, is_complement_kind, sign_multiplier, standardize,
    trim_number, value_digit,
)


__all__ = ('to_decimal', 'from_decimal', 'convert_bases',
           'int_to_binary', 'binary_to_int', 'decimal_to_8421', 'decimal_from_8421')


def _decimal_sign(value):
    '''Map the sign of a non-negative-or-signed value to base 10.'''
    if value.kind == NumberType.SMR:
        return '9' if value.sign == top_digit(value.radix) else '0'
    if is_complement_kind(value.kind):
        return '0'
    return value.sign


def to_decimal(numeral, standardized=False, log=True):
    '''Return numeral converted to base 10, keeping its kind.

    The whole part is evaluated exactly by Horner's method.  Each fraction digit d at
    position k contributes floor(d * 10^8 / radix^k) to an eight digit accumulator.
    '''
    if not isinstance(numeral, Numeral):
        return InvalidInput('to_decimal', 'missing operand').signal(log)
    value = numeral.copy() if standardized else standardize(numeral, log)
    if value is None:
        return None
    if value.radix == 10:
        return value

    radix = value.radix
    negative_complement = (is_complement_kind(value.kind)
                           and sign_multiplier(value) == -1)
    if negative_complement:
        value = complement(value, True, log)

    whole = 0
    for char in value.whole:
        whole = whole * radix + DIGIT_VALUES[char]

    fraction = 0
    scale = radix
    for char in value.fraction:
        fraction += DIGIT_VALUES[char] * PRECISION_NUMBER // scale
        scale *= radix

    result = Numeral(_decimal_sign(value), str(whole),
                     str(fraction).zfill(PRECISION), 10, value.kind)
    trim_number(result)
    if negative_complement:
        result = complement(result, True, log)
    return trim_number(result)


def from_decimal(numeral, radix, standardized=False, log=True):
    '''Return a base 10 numeral converted to radix, keeping its kind.

    The whole part is converted by repeated division.  The fraction is truncated to eight
    digits, then repeatedly multiplied by radix, each integer part giving the next digit,
    until it is exhausted or eight digits have been produced.
    '''
    if not isinstance(numeral, Numeral):
        return InvalidInput('from_decimal', 'missing operand').signal(log)
    if not is_valid_radix(radix):
        return InvalidRadix('from_decimal', f'invalid radix {radix!r}').signal(log)
    if numeral.radix != 10:
        return InvalidRadix('from_decimal', f'{numeral} is not a decimal number').signal(log)
    value = numeral.copy() if standardized else standardize(numeral, log)
    if value is None:
        return None
    if radix == 10:
        return value

    negative_complement = (is_complement_kind(value.kind)
                           and sign_multiplier(value) == -1)
    if negative_complement:
        value = complement(value, True, log)

    if value.kind == NumberType.SMR:
        sign = top_digit(radix) if value.sign == '9' else '0'
    elif is_complement_kind(value.kind):
        sign = '0'
    else:
        sign = value.sign

    whole = _int_to_digits(int(value.whole), radix)

    remainder = int(value.fraction[:PRECISION].ljust(PRECISION, '0'))
    fraction = []
    while remainder and len(fraction) < PRECISION:
        digit, remainder = divmod(remainder * radix, PRECISION_NUMBER)
        fraction.append(DIGITS[digit])

    result = Numeral(sign, whole, ''.join(fraction), radix, value.kind)
    if negative_complement:
        result = complement(result, True, log)
    return trim_number(result)


def convert_bases(numeral, radix, standardized=False, log=True):
    '''Return numeral converted to radix through base 10.'''
    if not isinstance(numeral, Numeral):
        return InvalidInput('convert_bases', 'missing operand').signal(log)
    if numeral.radix == radix:
        return numeral.copy() if standardized else standardize(numeral, log)
    decimal = to_decimal(numeral, standardized, log)
    if decimal is None:
        return None
    return from_decimal(decimal, radix, True, log)


##
## Binary and BCD digit helpers
##

def int_to_binary(value, width=0, log=True):
    '''Return the binary digits of a non-negative integer, padded on the left to width.'''
    if not isinstance(value, int) or value < 0:
        return InvalidInput('int_to_binary', f'cannot convert {value!r} to binary'
                            ).signal(log)
    return format(value, 'b').zfill(width)


def binary_to_int(bits, log=True):
    if not isinstance(bits, str) or not bits or bits.strip('01'):
        return InvalidNumber('binary_to_int', f'{bits!r} is not a binary number').signal(log)
    return int(bits, 2)


def decimal_to_8421(digits, log=True):
    '''Return the packed BCD encoding of a string of decimal digits, four bits per digit.'''
    if not isinstance(digits, str) or not digits:
        return InvalidInput('decimal_to_8421', 'empty input').signal(log)
    bits = []
    for char in digits:
        value = DIGIT_VALUES.get(char)
        if value is None or value > 9:
            return InvalidDigit('decimal_to_8421', f'{char!r} is not a decimal digit'
                                ).signal(log)
        bits.append(format(value, '04b'))
    return ''.join(bits)


def decimal_from_8421(bits, log=True):
    '''Return the digits of a packed BCD bit string, padded on the left to whole groups of
    four bits.  Groups above 9 decode to the hexadecimal digits A to F.'''
    if not isinstance(bits, str) or not bits or bits.strip('01'):
        return InvalidNumber('decimal_from_8421', f'{bits!r} is not a binary number'
                             ).signal(log)
    bits = bits.zfill(-(-len(bits) // 4) * 4)
    return ''.join(value_digit(int(bits[start:start + 4], 2), log)
                   for start in range(0, len(bits), 4))
