#
# Arbitrary radix fixed-point numerals: digit and sign primitives, parsing,
# standardization, padding and length equalization.
#
# A numeral is kept as strings of digit characters, most significant first, so any
# radix from 2 to 35 and any number of digits can be represented.
#

from enum import IntEnum

import attr

from .context import (
    get_context, InvalidDigit, InvalidRadix, InvalidNumber, InvalidInput,
    IncompatibleOperands, TooLarge,
)


__all__ = ('NumberType', 'Numeral',
           'PRECISION', 'PRECISION_NUMBER', 'MIN_RADIX', 'MAX_RADIX', 'PLUS', 'MINUS',
           'digit_value', 'value_digit', 'is_valid_radix', 'top_digit', 'is_complement_kind',
           'is_sign_at', 'get_sign', 'remove_sign', 'is_valid_sign', 'sign_multiplier',
           'is_valid_number', 'is_valid_numeral', 'parse', 'trim_sign', 'trim_number',
           'standardize', 'pad_whole_to', 'pad_fraction_to', 'to_length',
           'add_zeroes_before', 'add_zeroes_after', 'equalize_length')


# Number of fractional decimal digits kept by conversions through base 10
PRECISION = 8
PRECISION_NUMBER = 10 ** PRECISION

MIN_RADIX = 2
MAX_RADIX = 35

PLUS = '+'
MINUS = '-'
SPACES = ' \t\n'
RADIX_POINTS = '.,'

DIGITS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'
DIGIT_VALUES = {char: value for value, char in enumerate(DIGITS)}

class NumberType(IntEnum):
    '''How the sign of a numeral is represented.'''
    UNSIGNED = 0
    # A run of '+' and '-' characters
    SIGNED = 1
    # Sign-magnitude: a single sign digit, 0 or radix - 1
    SMR = 2
    # One's complement
    OC = 3
    # Two's (radix) complement
    TC = 4

@attr.s(slots=True)
class Numeral:
    '''A fixed-point numeral in an arbitrary radix.

    sign is the sign text: empty for UNSIGNED, a run of '+'/'-' for SIGNED, or a run of
    the digit 0 or radix - 1 for the positional kinds.  whole and fraction are the digits
    either side of the radix point.  Numerals compare equal when all five fields are
    equal, so "10.5" and "10.50" differ.
    '''

    sign = attr.ib()
    whole = attr.ib()
    fraction = attr.ib()
    radix = attr.ib()
    kind = attr.ib(converter=NumberType)

    def copy(self):
        return attr.evolve(self)

    def to_signed(self):
        '''The sign, whole and fraction separated by a radix point if there is a fraction.'''
        text = self.sign + self.whole
        if _strip_spaces(self.fraction):
            text += '.' + self.fraction
        return _strip_spaces(text)

    def to_unsigned(self):
        '''As to_signed() but without the sign.'''
        text = self.whole
        if _strip_spaces(self.fraction):
            text += '.' + self.fraction
        return _strip_spaces(text)

    def to_whole(self):
        '''All the digits of the numeral, sign included, without a radix point.'''
        return _strip_spaces(self.sign + self.whole + self.fraction)

    def __str__(self):
        return f'{self.to_signed()} ({self.radix})'

def _strip_spaces(text):
    return ''.join(char for char in text if char not in SPACES)

##
## Digit and sign primitives
##

def digit_value(char, log=True):
    '''Return the value of a digit character: '0'-'9' are 0-9 and 'A'-'Z' are 10-35.'''
    value = DIGIT_VALUES.get(char) if isinstance(char, str) else None
    if value is None:
        return InvalidDigit('digit_value', f'invalid digit {char!r}').signal(log)
    return value

def value_digit(value, log=True):
    '''Return the digit character for a value in [0, 35].'''
    if not isinstance(value, int) or not 0 <= value < len(DIGITS):
        return InvalidDigit('value_digit', f'invalid digit value {value!r}').signal(log)
    return DIGITS[value]

def is_valid_radix(radix):
    return isinstance(radix, int) and MIN_RADIX <= radix <= MAX_RADIX

def top_digit(radix):
    '''The digit radix - 1, which marks a negative sign in the positional kinds.'''
    return DIGITS[radix - 1]

def is_complement_kind(kind):
    return kind in (NumberType.OC, NumberType.TC)

def _sign_digits(radix):
    return ('0', top_digit(radix))

def _digits_below(text, radix):
    '''True if every character of text is a digit of the radix.'''
    return all(DIGIT_VALUES.get(char, radix) < radix for char in text)

def is_sign_at(text, index, radix, kind):
    '''Return True if the character at index can be a sign token.  Positional kinds only
    recognise the digits 0 and radix - 1, and only in the leading run.'''
    if not 0 <= index < len(text):
        return False
    char = text[index]
    if kind == NumberType.SIGNED:
        return char in (PLUS, MINUS)
    if kind == NumberType.UNSIGNED or not is_valid_radix(radix):
        return False
    if char not in _sign_digits(radix):
        return False
    # The run must start the text (ignoring spaces) and be made of one repeated digit
    for prior in text[:index]:
        if prior not in SPACES and prior != char:
            return False
    return kind != NumberType.SMR or not any(prior == char for prior in text[:index])

def _sign_end(text, radix, kind):
    '''Return the index one past the sign run of text, 0 if there is none.'''
    if kind == NumberType.UNSIGNED:
        return 0
    end = 0
    if kind == NumberType.SIGNED:
        for index, char in enumerate(text):
            if char in (PLUS, MINUS):
                end = index + 1
            elif char not in SPACES:
                break
        return end

    first = None
    for index, char in enumerate(text):
        if char in SPACES:
            continue
        if first is None:
            if not is_sign_at(text, index, radix, kind):
                break
            first = char
            end = index + 1
            if kind == NumberType.SMR:
                break
        elif char == first:
            end = index + 1
        else:
            break
    return end

def get_sign(text, radix, kind, log=True):
    '''Return the sign run of text without spaces.  A missing sign is implicitly '+' for
    SIGNED and '0' for the positional kinds, and is warned about.'''
    if kind == NumberType.UNSIGNED:
        return ''
    sign = _strip_spaces(text[:_sign_end(text, radix, kind)])
    if not sign:
        sign = PLUS if kind == NumberType.SIGNED else '0'
        get_context().warn('get_sign', f'no sign given, assuming {sign!r}', log)
    return sign

def remove_sign(text, radix, kind):
    '''Return text after its sign run.  Nothing after the sign means zero.'''
    rest = text[_sign_end(text, radix, kind):]
    return rest if _strip_spaces(rest) else '0'

def is_valid_sign(sign, radix, kind):
    if kind == NumberType.UNSIGNED:
        return sign == ''
    if not sign:
        return False
    if kind == NumberType.SIGNED:
        return all(char in (PLUS, MINUS) for char in sign)
    if not is_valid_radix(radix) or sign[0] not in _sign_digits(radix):
        return False
    if kind == NumberType.SMR:
        return len(sign) == 1
    return sign == sign[0] * len(sign)

def sign_multiplier(numeral, standardized=False):
    '''Return 1 for a positive numeral, -1 for a negative one and 0 if the sign cannot be
    read.  A standardized SIGNED numeral has a single sign character.'''
    kind = numeral.kind
    sign = _strip_spaces(numeral.sign)
    if kind == NumberType.UNSIGNED:
        return 1
    if kind == NumberType.SIGNED:
        if standardized:
            return -1 if sign == MINUS else 1 if sign == PLUS else 0
        multiplier = 1
        for char in sign:
            if char == MINUS:
                multiplier = -multiplier
            elif char != PLUS:
                return 0
        return multiplier if sign else 0
    if not is_valid_sign(sign, numeral.radix, kind):
        return 0
    return 1 if sign[0] == '0' else -1

def is_valid_number(text, radix, kind):
    '''Return True if text is a numeral of the radix and kind: an optional sign run, then
    digits below the radix with at most one radix point.  Spaces are ignored.'''
    if not isinstance(text, str) or not _strip_spaces(text) or not is_valid_radix(radix):
        return False
    seen_point = False
    for char in text[_sign_end(text, radix, kind):]:
        if char in SPACES:
            continue
        if char in RADIX_POINTS:
            if seen_point:
                return False
            seen_point = True
        elif DIGIT_VALUES.get(char, radix) >= radix:
            return False
    return True

def is_valid_numeral(numeral):
    '''Return True if the numeral's sign and digits are valid for its radix and kind.
    Spaces are not accepted here; standardize() removes them.'''
    if not isinstance(numeral, Numeral) or not is_valid_radix(numeral.radix):
        return False
    return (is_valid_sign(numeral.sign, numeral.radix, numeral.kind)
            and bool(numeral.whole)
            and _digits_below(numeral.whole, numeral.radix)
            and _digits_below(numeral.fraction, numeral.radix))

def parse(text, radix, kind, log=True):
    '''Parse text into a Numeral of the given radix and kind.  The digits are kept as
    written; use standardize() to trim them.'''
    if not isinstance(text, str) or not _strip_spaces(text):
        return InvalidInput('parse', 'empty input').signal(log)
    if not is_valid_radix(radix):
        return InvalidRadix('parse', f'invalid radix {radix!r}').signal(log)
    kind = NumberType(kind)
    if not is_valid_number(text, radix, kind):
        return InvalidNumber('parse', f'{text!r} is not a valid number in radix {radix}'
                             ).signal(log)

    sign = get_sign(text, radix, kind, log)
    rest = _strip_spaces(remove_sign(text, radix, kind))
    whole, _, fraction = rest.replace(',', '.').partition('.')
    if not whole:
        whole = sign[0] if is_complement_kind(kind) else '0'
    return Numeral(sign, whole, fraction, radix, kind)

def trim_sign(numeral):
    '''Collapse the sign to a single token, in place.  Returns the numeral.'''
    kind = numeral.kind
    if kind == NumberType.SIGNED:
        numeral.sign = MINUS if sign_multiplier(numeral) == -1 else PLUS
    elif kind != NumberType.UNSIGNED and numeral.sign:
        numeral.sign = numeral.sign[0]
    return numeral

def _fraction_fill(numeral):
    '''The digit that extends a fraction without changing its value.'''
    # Negative one's complement values extend with the sign digit on the right too
    if (numeral.kind == NumberType.OC and numeral.sign
            and numeral.sign[0] == top_digit(numeral.radix)):
        return numeral.sign[0]
    return '0'

def _whole_fill(numeral):
    '''The digit that extends a whole part without changing its value.'''
    if is_complement_kind(numeral.kind) and numeral.sign:
        return numeral.sign[0]
    return '0'

def trim_number(numeral):
    '''Remove leading and trailing digits that do not change the value, in place.  For the
    complement kinds those are copies of the sign digit.  Returns the numeral.'''
    numeral.sign = _strip_spaces(numeral.sign)
    whole_fill = _whole_fill(numeral)
    numeral.whole = _strip_spaces(numeral.whole).lstrip(whole_fill) or whole_fill
    numeral.fraction = _strip_spaces(numeral.fraction).rstrip(_fraction_fill(numeral))
    return numeral

def standardize(numeral, log=True):
    '''Return a standardized copy of numeral: spaces removed, sign collapsed and padding
    digits trimmed.'''
    if not isinstance(numeral, Numeral):
        return InvalidInput('standardize', 'not a numeral').signal(log)
    result = Numeral(_strip_spaces(numeral.sign), _strip_spaces(numeral.whole),
                     _strip_spaces(numeral.fraction), numeral.radix, numeral.kind)
    if not is_valid_radix(result.radix):
        return InvalidRadix('standardize', f'invalid radix {result.radix!r}').signal(log)
    if not is_valid_numeral(result):
        return InvalidNumber('standardize', f'invalid number {result}').signal(log)
    return trim_number(trim_sign(result))

def pad_whole_to(numeral, length, log=True):
    '''Extend the whole part on the left to length digits, in place.  Complement kinds
    extend with their sign digit, the others with zeroes.  Returns the numeral.'''
    if len(numeral.whole) > length:
        return TooLarge('pad_whole_to', f'whole part of {numeral} is longer than {length}'
                        ).signal(log)
    numeral.whole = _whole_fill(numeral) * (length - len(numeral.whole)) + numeral.whole
    return numeral

def pad_fraction_to(numeral, length):
    '''Extend or truncate the fraction to exactly length digits, in place.  Truncation
    drops digits; it does not round.  Returns the numeral.'''
    fraction = numeral.fraction[:length]
    numeral.fraction = fraction + _fraction_fill(numeral) * (length - len(fraction))
    return numeral

def to_length(numeral, total_length, fraction_length, log=True):
    '''Pad the numeral in place to total_length digits of which fraction_length are after
    the radix point.  The sign is not counted.'''
    whole_length = total_length - fraction_length
    if whole_length < 1:
        return InvalidInput('to_length', f'no room for the whole part in {total_length} '
                            f'digits').signal(log)
    if pad_whole_to(numeral, whole_length, log) is None:
        return None
    return pad_fraction_to(numeral, fraction_length)

def _split_digits(text, radix, kind):
    '''Split numeral text into its sign, whole and fraction texts without validation.'''
    text = _strip_spaces(text)
    end = _sign_end(text, radix, kind)
    whole, point, fraction = text[end:].replace(',', '.').partition('.')
    return text[:end], whole, point, fraction

def add_zeroes_before(text, radix, kind, count, log=True):
    '''Prefix the whole digits of text with zeroes so there are count digits in all.'''
    if not isinstance(text, str):
        return InvalidInput('add_zeroes_before', 'empty input').signal(log)
    sign, whole, point, fraction = _split_digits(text, radix, kind)
    zeroes = '0' * (count - len(whole) - len(fraction))
    return sign + zeroes + whole + point + fraction

def add_zeroes_after(text, radix, kind, count, log=True):
    '''Suffix the digits of text with zeroes so there are count digits in all.'''
    if not isinstance(text, str):
        return InvalidInput('add_zeroes_after', 'empty input').signal(log)
    sign, whole, point, fraction = _split_digits(text, radix, kind)
    zeroes = '0' * (count - len(whole) - len(fraction))
    return sign + whole + point + fraction + zeroes

def equalize_length(first, second, standardized=False, log=True):
    '''Pad the whole and fraction parts of both numerals to the same lengths, in place.
    Unless standardized is True both are first standardized.  Returns True on success;
    on failure neither numeral is changed.'''
    if not isinstance(first, Numeral) or not isinstance(second, Numeral):
        return InvalidInput('equalize_length', 'missing operand', False).signal(log)
    if first.kind != second.kind:
        return IncompatibleOperands('equalize_length', 'numerals are of different types',
                                    False).signal(log)
    if not standardized:
        lhs = standardize(first, log)
        rhs = standardize(second, log)
        if lhs is None or rhs is None:
            return False
    else:
        lhs, rhs = first.copy(), second.copy()

    whole_length = max(len(lhs.whole), len(rhs.whole))
    fraction_length = max(len(lhs.fraction), len(rhs.fraction))
    for source, target in ((lhs, first), (rhs, second)):
        pad_whole_to(source, whole_length, log)
        pad_fraction_to(source, fraction_length)
        target.sign, target.whole, target.fraction = source.sign, source.whole, source.fraction
    return True
