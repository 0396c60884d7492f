#
# Bit-exact encoding and decoding of the IEEE 754 Binary32, Binary64, Decimal32 (DPD
# and BID) and Hexadecimal32 formats.
#
# Values are encoded from a signed decimal significand and an exponent in the
# format's own radix, and decoded back to a SignificandExponentPair whose
# significand is a base 10 numeral.
#

import re
from collections import namedtuple
from enum import IntEnum
from typing import NamedTuple

from .base import from_decimal, to_decimal, int_to_binary, decimal_to_8421, decimal_from_8421
from .context import (
    InvalidInput, InvalidNumber, InvalidRadix, InvalidExponent, InvalidEncoding,
    UnsupportedOperation, ExponentOutOfBounds, TooLarge,
)
from .fixedpoint import is_zero
from .numeral import (
    DIGIT_VALUES, MINUS, PLUS, NumberType, Numeral, parse, standardize,
)


__all__ = ('IEEE754Format', 'FormatProfile', 'IEEE754Number', 'SignificandExponentPair',
           'POS_ZERO', 'NEG_ZERO', 'POS_INF', 'NEG_INF', 'QNAN', 'SNAN',
           'to_ieee754_number', 'is_valid_ieee754', 'make_zero', 'make_infinity', 'make_nan',
           'normalize_binary', 'normalize_decimal', 'normalize_hexadecimal',
           'decimal_to_dpd', 'dpd_to_decimal',
           'encode_binary', 'encode_decimal', 'encode_hexadecimal', 'encode',
           'decode_binary', 'decode_decimal', 'decode_hexadecimal', 'decode',
           'encode_binary32', 'encode_binary64', 'encode_decimal32_dpd',
           'encode_decimal32_bid', 'encode_hexadecimal32',
           'decode_binary32', 'decode_binary64', 'decode_decimal32_dpd',
           'decode_decimal32_bid', 'decode_hexadecimal32')


# Special values returned by decoding
POS_ZERO = '+0'
NEG_ZERO = '-0'
POS_INF = '+Inf'
NEG_INF = '-Inf'
QNAN = 'qNaN'
SNAN = 'sNaN'

EXPONENT_REGEX = re.compile(r'^[+-]?\d+$')


class FormatProfile(NamedTuple):
    '''The fixed parameters of an encoding.  offset is the exponent bias; digits is the
    number of significand digits in the format's radix.'''
    short_name: str
    radix: int
    max_exponent: int
    min_exponent: int
    offset: int
    exponent_length: int
    significand_length: int
    digits: int


class IEEE754Format(IntEnum):
    BINARY32 = 0
    BINARY64 = 1
    DECIMAL32DPD = 2
    DECIMAL32BID = 3
    HEXADECIMAL32 = 4

    @property
    def profile(self):
        return _PROFILES[self]

    @property
    def short_name(self):
        return self.profile.short_name

    @property
    def is_binary(self):
        return self in (IEEE754Format.BINARY32, IEEE754Format.BINARY64)

    @property
    def is_decimal(self):
        return self in (IEEE754Format.DECIMAL32DPD, IEEE754Format.DECIMAL32BID)

    @property
    def width(self):
        '''Total number of bits, sign included.'''
        return 1 + self.profile.exponent_length + self.profile.significand_length


_PROFILES = {
    IEEE754Format.BINARY32: FormatProfile('bin32', 2, 127, -126, 127, 8, 23, 24),
    IEEE754Format.BINARY64: FormatProfile('bin64', 2, 1023, -1022, 1023, 11, 52, 53),
    IEEE754Format.DECIMAL32DPD: FormatProfile('dec32dpd', 10, 90, -95, 101, 11, 20, 7),
    IEEE754Format.DECIMAL32BID: FormatProfile('dec32bid', 10, 90, -95, 101, 11, 20, 7),
    IEEE754Format.HEXADECIMAL32: FormatProfile('hex32', 16, 63, -63, 64, 7, 24, 6),
}


class IEEE754Number(namedtuple('IEEE754Number', 'sign exponent significand format')):
    '''The three bit fields of an encoded value, as strings of 0 and 1, with its format.'''

    def __new__(cls, sign, exponent, significand, fmt):
        fmt = IEEE754Format(fmt)
        profile = fmt.profile
        for name, field, width in (('sign', sign, 1),
                                   ('exponent', exponent, profile.exponent_length),
                                   ('significand', significand, profile.significand_length)):
            if not isinstance(field, str):
                raise TypeError(f'{name} must be a string of bits')
            if len(field) != width or field.strip('01'):
                raise ValueError(f'{name} must be {width} bits for {fmt.short_name}')
        return super().__new__(cls, sign, exponent, significand, fmt)

    @property
    def bits(self):
        return self.sign + self.exponent + self.significand

    def __str__(self):
        return f'{self.sign} {self.exponent} {self.significand}'


class SignificandExponentPair(NamedTuple):
    '''A decoded value: significand x base ^ exponent.  For special values significand is
    None and special is one of the special value constants.'''
    significand: Numeral
    base: int
    exponent: int
    special: str = None

    def is_special_value(self):
        return self.special is not None

    def __str__(self):
        if self.special is not None:
            return self.special
        return f'{self.significand.to_signed()} x {self.base}^{self.exponent}'


##
## Bit patterns
##

def to_ieee754_number(text, fmt, log=True):
    '''Split text, the bits of an encoded value with optional whitespace, into its
    fields.'''
    fmt = IEEE754Format(fmt)
    if not isinstance(text, str):
        return InvalidEncoding('to_ieee754_number', 'encoding must be text').signal(log)
    bits = ''.join(text.split())
    if len(bits) != fmt.width or bits.strip('01'):
        return InvalidEncoding('to_ieee754_number', f'{text!r} is not a {fmt.width}-bit '
                               f'{fmt.short_name} encoding').signal(log)
    exponent_end = 1 + fmt.profile.exponent_length
    return IEEE754Number(bits[0], bits[1:exponent_end], bits[exponent_end:], fmt)


def is_valid_ieee754(text, fmt):
    bits = ''.join(text.split()) if isinstance(text, str) else ''
    return len(bits) == IEEE754Format(fmt).width and not bits.strip('01')


def _sign_bit(negative):
    return '1' if negative else '0'


def make_zero(fmt, negative=False):
    profile = IEEE754Format(fmt).profile
    return IEEE754Number(_sign_bit(negative), '0' * profile.exponent_length,
                         '0' * profile.significand_length, fmt)


def make_infinity(fmt, negative=False):
    fmt = IEEE754Format(fmt)
    profile = fmt.profile
    if fmt.is_decimal:
        exponent = '11110'.ljust(profile.exponent_length, '0')
    else:
        exponent = '1' * profile.exponent_length
    return IEEE754Number(_sign_bit(negative), exponent, '0' * profile.significand_length, fmt)


def make_nan(fmt, signalling=False, log=True):
    '''Return the canonical quiet or signalling NaN of the format.  Hexadecimal32 has no
    NaNs.'''
    fmt = IEEE754Format(fmt)
    profile = fmt.profile
    if fmt == IEEE754Format.HEXADECIMAL32:
        return UnsupportedOperation('make_nan', 'hex32 has no NaN').signal(log)
    if fmt.is_decimal:
        exponent = ('111111' if signalling else '11111').ljust(profile.exponent_length, '0')
        significand = '0' * profile.significand_length
    else:
        exponent = '1' * profile.exponent_length
        significand = ('01' if signalling else '1').ljust(profile.significand_length, '0')
    return IEEE754Number('0', exponent, significand, fmt)


##
## Normalization
##

def _standardized(numeral, radix, source, log):
    if not isinstance(numeral, Numeral):
        return InvalidInput(source, 'missing operand').signal(log)
    if numeral.radix != radix:
        return InvalidRadix(source, f'{numeral} is not in radix {radix}').signal(log)
    return standardize(numeral, log)


def normalize_binary(numeral, log=True):
    '''Return (numeral, shift) where numeral has the single digit 1 before the radix point
    and equals the argument times 2^-shift.'''
    value = _standardized(numeral, 2, 'normalize_binary', log)
    if value is None:
        return None
    if is_zero(value):
        return InvalidNumber('normalize_binary', 'cannot normalize zero').signal(log)
    if value.whole == '0':
        index = value.fraction.index('1')
        shift = -(index + 1)
        value.fraction = value.fraction[index + 1:]
    else:
        shift = len(value.whole) - 1
        value.fraction = value.whole[1:] + value.fraction
    value.whole = '1'
    value.fraction = value.fraction.rstrip('0')
    return value, shift


def normalize_decimal(numeral, log=True):
    '''Return (numeral, shift) where numeral is an integer of at most seven significant
    digits and the argument is approximately numeral times 10^shift.

    Digits beyond seven are rounded half to even.  A whole part longer than seven digits
    is TooLarge.  Integers have their trailing zeroes moved into the shift.
    '''
    value = _standardized(numeral, 10, 'normalize_decimal', log)
    if value is None:
        return None
    digits = _PROFILES[IEEE754Format.DECIMAL32DPD].digits
    if len(value.whole) > digits:
        return TooLarge('normalize_decimal', f'{value} has more than {digits} whole '
                        'digits').signal(log)

    if value.fraction:
        whole = '' if value.whole == '0' else value.whole
        room = digits - len(whole)
        if not whole:
            # Leading fraction zeroes are not significant
            room += len(value.fraction) - len(value.fraction.lstrip('0'))
        kept = value.fraction[:room]
        dropped = value.fraction[room:]
        result = int(whole + kept or '0')
        if dropped and (dropped[0] > '5' or dropped[0] == '5' and (
                dropped[1:].strip('0') or result % 2)):
            result += 1
        shift = -len(kept)
        if len(str(result)) > digits:
            result //= 10
            shift += 1
        value.whole, value.fraction = str(result), ''
    else:
        stripped = value.whole.rstrip('0') or '0'
        shift = len(value.whole) - len(stripped) if stripped != '0' else 0
        value.whole = stripped
    return value, shift


def normalize_hexadecimal(numeral, log=True):
    '''Return (numeral, shift) where numeral is a pure fraction of exactly six hex digits
    whose first digit is nonzero, and the argument is approximately numeral times
    16^shift.'''
    value = _standardized(numeral, 16, 'normalize_hexadecimal', log)
    if value is None:
        return None
    digits = _PROFILES[IEEE754Format.HEXADECIMAL32].digits
    if len(value.whole) > digits:
        return TooLarge('normalize_hexadecimal', f'{value} has more than {digits} whole '
                        'digits').signal(log)
    if is_zero(value):
        return InvalidNumber('normalize_hexadecimal', 'cannot normalize zero').signal(log)
    if value.whole != '0':
        shift = len(value.whole)
        fraction = value.whole + value.fraction
    else:
        fraction = value.fraction.lstrip('0')
        shift = len(fraction) - len(value.fraction)
    value.whole = '0'
    value.fraction = fraction[:digits].ljust(digits, '0')
    return value, shift


##
## Densely packed decimal
##

def _valid_bits(bits, source, log):
    if not isinstance(bits, str) or not bits or bits.strip('01'):
        return InvalidNumber(source, f'{bits!r} is not a binary number', False).signal(log)
    return True


def _declet(n):
    '''Encode 12 BCD bits (three digits) as 10 DPD bits, steered by bits a, e and i.'''
    aei = n[0] + n[4] + n[8]
    if aei == '000':
        return n[1:4] + n[5:8] + '0' + n[9:12]
    if aei == '001':
        return n[1:4] + n[5:8] + '100' + n[11]
    if aei == '010':
        return n[1:4] + n[9:11] + n[7] + '101' + n[11]
    if aei == '100':
        return n[9:11] + n[3] + n[5:8] + '110' + n[11]
    if aei == '110':
        return n[9:11] + n[3] + '00' + n[7] + '111' + n[11]
    if aei == '101':
        return n[5:7] + n[3] + '01' + n[7] + '111' + n[11]
    if aei == '011':
        return n[1:4] + '10' + n[7] + '111' + n[11]
    return '00' + n[3] + '11' + n[7] + '111' + n[11]


def _undeclet(n):
    '''Decode 10 DPD bits to 12 BCD bits.'''
    if n[6] == '0':
        return '0' + n[0:3] + '0' + n[3:6] + '0' + n[7:10]
    wx = n[7:9]
    if wx == '00':
        return '0' + n[0:3] + '0' + n[3:6] + '100' + n[9]
    if wx == '01':
        return '0' + n[0:3] + '100' + n[5] + '0' + n[3:5] + n[9]
    if wx == '10':
        return '100' + n[2] + '0' + n[3:6] + '0' + n[0:2] + n[9]
    st = n[3:5]
    if st == '00':
        return '100' + n[2] + '100' + n[5] + '0' + n[0:2] + n[9]
    if st == '01':
        return '100' + n[2] + '0' + n[0:2] + n[5] + '100' + n[9]
    if st == '10':
        return '0' + n[0:3] + '100' + n[5] + '100' + n[9]
    return '100' + n[2] + '100' + n[5] + '100' + n[9]


def decimal_to_dpd(bits, log=True):
    '''Transcode packed BCD bits to densely packed decimal.  The input is zero-extended on
    the left to whole groups of three digits; each group of 12 bits becomes 10.'''
    if not _valid_bits(bits, 'decimal_to_dpd', log):
        return None
    bits = bits.zfill(-(-len(bits) // 12) * 12)
    return ''.join(_declet(bits[start:start + 12]) for start in range(0, len(bits), 12))


def dpd_to_decimal(bits, log=True):
    '''Transcode densely packed decimal bits to packed BCD, 10 bits to 12.'''
    if not _valid_bits(bits, 'dpd_to_decimal', log):
        return None
    bits = bits.zfill(-(-len(bits) // 10) * 10)
    return ''.join(_undeclet(bits[start:start + 10]) for start in range(0, len(bits), 10))


##
## Encoding
##

def _parse_significand(significand, source, log):
    '''Return the significand as a standardized SIGNED base 10 numeral.'''
    if isinstance(significand, Numeral):
        if significand.kind != NumberType.SIGNED or significand.radix != 10:
            return InvalidNumber(source, f'significand {significand} must be a signed '
                                 'decimal number').signal(log)
        return standardize(significand, log)
    if not isinstance(significand, str) or not significand.strip():
        return InvalidInput(source, 'missing significand').signal(log)
    text = significand.strip()
    if text[0] not in (PLUS, MINUS):
        text = PLUS + text
    value = parse(text, 10, NumberType.SIGNED, log)
    if value is None:
        return None
    return standardize(value, log)


def _parse_exponent(exponent, source, log):
    if isinstance(exponent, int) and not isinstance(exponent, bool):
        return exponent
    if isinstance(exponent, str) and EXPONENT_REGEX.match(exponent.strip()):
        return int(exponent.strip())
    return InvalidExponent(source, f'invalid exponent {exponent!r}').signal(log)


def _check_exponent(exponent, profile, source, log):
    if not profile.min_exponent <= exponent <= profile.max_exponent:
        return ExponentOutOfBounds(source, f'exponent {exponent} is outside '
                                   f'[{profile.min_exponent}, {profile.max_exponent}]',
                                   False).signal(log)
    return True


def _format_of(fmt, check, source, log):
    fmt = IEEE754Format(fmt)
    if not check(fmt):
        return InvalidInput(source, f'wrong format {fmt.short_name}').signal(log)
    return fmt


def encode_binary(significand, exponent, fmt=IEEE754Format.BINARY32, log=True):
    '''Encode significand x 2^exponent.  A significand whose binary whole part does not fit
    the significand field encodes as infinity.'''
    source = 'encode_binary'
    fmt = _format_of(fmt, lambda fmt: fmt.is_binary, source, log)
    if fmt is None:
        return None
    profile = fmt.profile
    value = _parse_significand(significand, source, log)
    if value is None:
        return None
    negative = value.sign == MINUS

    binary = from_decimal(value, 2, True, log)
    if binary is None:
        return None
    if is_zero(binary):
        return make_zero(fmt, negative)
    if len(binary.whole) > profile.significand_length:
        return make_infinity(fmt, negative)
    exponent = _parse_exponent(exponent, source, log)
    if exponent is None:
        return None

    binary, shift = normalize_binary(binary, log)
    exponent += shift
    if not _check_exponent(exponent, profile, source, log):
        return None
    length = profile.significand_length
    return IEEE754Number(_sign_bit(negative),
                         int_to_binary(exponent + profile.offset, profile.exponent_length),
                         binary.fraction[:length].ljust(length, '0'), fmt)


def encode_decimal(significand, exponent, fmt=IEEE754Format.DECIMAL32DPD, log=True):
    '''Encode significand x 10^exponent as Decimal32, with the significand packed as
    densely packed decimal or as a binary integer according to fmt.

    The leading digit shares the combination field with the biased exponent: digits 0-7
    take three bits after the top two exponent bits, 8 and 9 are marked by 11 and keep
    only their low bit.
    '''
    source = 'encode_decimal'
    fmt = _format_of(fmt, lambda fmt: fmt.is_decimal, source, log)
    if fmt is None:
        return None
    profile = fmt.profile
    value = _parse_significand(significand, source, log)
    if value is None:
        return None
    negative = value.sign == MINUS
    if len(value.whole) > profile.digits:
        return make_infinity(fmt, negative)
    exponent = _parse_exponent(exponent, source, log)
    if exponent is None:
        return None

    normalized = normalize_decimal(value, log)
    if normalized is None:
        return None
    value, shift = normalized
    exponent += shift
    if not _check_exponent(exponent, profile, source, log):
        return None

    digits = value.whole.zfill(profile.digits)
    biased = int_to_binary(exponent + profile.offset, 8)
    if fmt == IEEE754Format.DECIMAL32DPD:
        lead = decimal_to_8421(digits[0], log)
        if lead[0] == '0':
            combination = biased[0:2] + lead[1:4] + biased[2:8]
        else:
            combination = '11' + biased[0:2] + lead[3] + biased[2:8]
        significand = (decimal_to_dpd(decimal_to_8421(digits[1:4], log), log)
                       + decimal_to_dpd(decimal_to_8421(digits[4:7], log), log))
    else:
        bits = int_to_binary(int(digits), 24)
        lead = bits[:4]
        if lead[0] == '0':
            combination = biased + lead[1:4]
        else:
            combination = '11' + biased + lead[3]
        significand = bits[4:]
    return IEEE754Number(_sign_bit(negative), combination, significand, fmt)


def _hex_to_bits(digits):
    return ''.join(format(DIGIT_VALUES[char], '04b') for char in digits)


def encode_hexadecimal(significand, exponent, log=True):
    '''Encode significand x 16^exponent as Hexadecimal32.  The significand is a six digit
    hex fraction with a nonzero first digit.'''
    source = 'encode_hexadecimal'
    fmt = IEEE754Format.HEXADECIMAL32
    profile = fmt.profile
    value = _parse_significand(significand, source, log)
    if value is None:
        return None
    negative = value.sign == MINUS

    hexadecimal = from_decimal(value, 16, True, log)
    if hexadecimal is None:
        return None
    if is_zero(hexadecimal):
        return make_zero(fmt, negative)
    if len(hexadecimal.whole) > profile.digits:
        return make_infinity(fmt, negative)
    exponent = _parse_exponent(exponent, source, log)
    if exponent is None:
        return None

    hexadecimal, shift = normalize_hexadecimal(hexadecimal, log)
    exponent += shift
    if not _check_exponent(exponent, profile, source, log):
        return None
    return IEEE754Number(_sign_bit(negative),
                         int_to_binary(exponent + profile.offset, profile.exponent_length),
                         _hex_to_bits(hexadecimal.fraction), fmt)


def encode(significand, exponent, fmt, log=True):
    '''Encode significand x radix^exponent in any of the formats.'''
    fmt = IEEE754Format(fmt)
    if fmt.is_binary:
        return encode_binary(significand, exponent, fmt, log)
    if fmt.is_decimal:
        return encode_decimal(significand, exponent, fmt, log)
    return encode_hexadecimal(significand, exponent, log)


##
## Decoding
##

def _as_number(value, fmt, source, log):
    if isinstance(value, IEEE754Number):
        if fmt is not None and value.format != IEEE754Format(fmt):
            return InvalidEncoding(source, f'{value} is not a {IEEE754Format(fmt).short_name} '
                                   'encoding').signal(log)
        return value
    if fmt is None:
        return InvalidInput(source, 'the format of a text encoding must be given').signal(log)
    return to_ieee754_number(value, fmt, log)


def _sign(number):
    return MINUS if number.sign == '1' else PLUS


def _special(number, special):
    return SignificandExponentPair(None, number.format.profile.radix, 0, special)


def _binary_special(number):
    if not number.exponent.strip('1'):
        if not number.significand.strip('0'):
            return NEG_INF if number.sign == '1' else POS_INF
        return QNAN if number.significand[0] == '1' else SNAN
    if not (number.exponent + number.significand).strip('0'):
        return NEG_ZERO if number.sign == '1' else POS_ZERO
    return None


def _rescale_binary(value, exponent):
    '''Move fraction digits into the whole part so the significand reads as a plain
    number, with the exponent adjusted to match.  Small exponents are absorbed entirely;
    otherwise the number of digits moved depends on how many there are.'''
    lead = 0 if value.whole == '0' else 1
    length = lead + len(value.fraction)
    if length == 1:
        return value, exponent
    if 0 <= exponent < 10:
        count = exponent
    elif length < 9:
        count = len(value.fraction)
    elif length < 14:
        count = 8 - lead
    else:
        count = length - 5 - lead
    whole = (value.whole if lead else '') + value.fraction[:count].ljust(count, '0')
    value.whole = whole.lstrip('0') or '0'
    value.fraction = value.fraction[count:]
    return value, exponent - count


def decode_binary(value, fmt=None, log=True):
    '''Decode a Binary32 or Binary64 encoding to significand x 2^exponent.'''
    source = 'decode_binary'
    number = _as_number(value, fmt, source, log)
    if number is None:
        return None
    if not number.format.is_binary:
        return InvalidEncoding(source, f'{number} is not a binary encoding').signal(log)
    special = _binary_special(number)
    if special is not None:
        return _special(number, special)

    profile = number.format.profile
    exponent = int(number.exponent, 2) - profile.offset
    if not number.exponent.strip('0'):
        # Subnormal: no implicit leading 1 and the minimum exponent
        binary, shift = normalize_binary(
            Numeral(_sign(number), '0', number.significand, 2, NumberType.SIGNED), log)
        exponent += 1 + shift
    else:
        binary = standardize(Numeral(_sign(number), '1', number.significand, 2,
                                     NumberType.SIGNED), log)
    binary, exponent = _rescale_binary(binary, exponent)
    decimal = to_decimal(binary, True, log)
    if decimal is None:
        return None
    return SignificandExponentPair(decimal, 2, exponent)


def _decimal_special(number):
    exponent = number.exponent
    if exponent[:4] == '1111':
        if exponent[4] == '0':
            return NEG_INF if number.sign == '1' else POS_INF
        return QNAN if exponent[5] == '0' else SNAN
    if exponent[:2] != '11' and not number.significand.strip('0'):
        lead = exponent[2:5] if number.format == IEEE754Format.DECIMAL32DPD else exponent[8:11]
        if lead == '000':
            return NEG_ZERO if number.sign == '1' else POS_ZERO
    return None


def decode_decimal(value, fmt=None, log=True):
    '''Decode a Decimal32 encoding, DPD or BID, to significand x 10^exponent.'''
    source = 'decode_decimal'
    number = _as_number(value, fmt, source, log)
    if number is None:
        return None
    if not number.format.is_decimal:
        return InvalidEncoding(source, f'{number} is not a decimal encoding').signal(log)
    special = _decimal_special(number)
    if special is not None:
        return _special(number, special)

    profile = number.format.profile
    bits = number.exponent
    if number.format == IEEE754Format.DECIMAL32DPD:
        if bits[:2] == '11':
            lead, biased = '100' + bits[4], bits[2:4] + bits[5:11]
        else:
            lead, biased = '0' + bits[2:5], bits[0:2] + bits[5:11]
        digits = decimal_from_8421(lead + dpd_to_decimal(number.significand[:10], log)
                                   + dpd_to_decimal(number.significand[10:], log), log)
    else:
        if bits[:2] == '11':
            lead, biased = '100' + bits[10], bits[2:10]
        else:
            lead, biased = '0' + bits[8:11], bits[0:8]
        coefficient = int(lead + number.significand, 2)
        # Non-canonical coefficients are treated as zero
        if coefficient >= 10 ** profile.digits:
            coefficient = 0
        digits = str(coefficient)
    exponent = int(biased, 2) - profile.offset

    normalized = normalize_decimal(Numeral(_sign(number), digits, '', 10, NumberType.SIGNED),
                                   log)
    if normalized is None:
        return None
    decimal, shift = normalized
    return SignificandExponentPair(decimal, 10, exponent + shift)


def decode_hexadecimal(value, log=True):
    '''Decode a Hexadecimal32 encoding to significand x 16^exponent.'''
    source = 'decode_hexadecimal'
    number = _as_number(value, IEEE754Format.HEXADECIMAL32, source, log)
    if number is None:
        return None
    if not number.exponent.strip('1') and not number.significand.strip('0'):
        return _special(number, NEG_INF if number.sign == '1' else POS_INF)
    if not number.significand.strip('0'):
        return _special(number, NEG_ZERO if number.sign == '1' else POS_ZERO)

    profile = number.format.profile
    fraction = decimal_from_8421(number.significand, log).rstrip('0')
    exponent = int(number.exponent, 2) - profile.offset
    count = exponent if 0 <= exponent < profile.digits else len(fraction)
    whole = fraction[:count].ljust(count, '0').lstrip('0') or '0'
    hexadecimal = Numeral(_sign(number), whole, fraction[count:], 16, NumberType.SIGNED)
    decimal = to_decimal(hexadecimal, False, log)
    if decimal is None:
        return None
    return SignificandExponentPair(decimal, 16, exponent - count)


def decode(value, fmt=None, log=True):
    '''Decode an IEEE754Number, or text in the given format.'''
    number = _as_number(value, fmt, 'decode', log)
    if number is None:
        return None
    if number.format.is_binary:
        return decode_binary(number, None, log)
    if number.format.is_decimal:
        return decode_decimal(number, None, log)
    return decode_hexadecimal(number, log)


##
## Per-format entry points
##

def encode_binary32(significand, exponent=0, log=True):
    return encode_binary(significand, exponent, IEEE754Format.BINARY32, log)


def encode_binary64(significand, exponent=0, log=True):
    return encode_binary(significand, exponent, IEEE754Format.BINARY64, log)


def encode_decimal32_dpd(significand, exponent=0, log=True):
    return encode_decimal(significand, exponent, IEEE754Format.DECIMAL32DPD, log)


def encode_decimal32_bid(significand, exponent=0, log=True):
    return encode_decimal(significand, exponent, IEEE754Format.DECIMAL32BID, log)


def encode_hexadecimal32(significand, exponent=0, log=True):
    return encode_hexadecimal(significand, exponent, log)


def decode_binary32(value, log=True):
    return decode_binary(value, IEEE754Format.BINARY32, log)


def decode_binary64(value, log=True):
    return decode_binary(value, IEEE754Format.BINARY64, log)


def decode_decimal32_dpd(value, log=True):
    return decode_decimal(value, IEEE754Format.DECIMAL32DPD, log)


def decode_decimal32_bid(value, log=True):
    return decode_decimal(value, IEEE754Format.DECIMAL32BID, log)


def decode_hexadecimal32(value, log=True):
    return decode_hexadecimal(value, log)
