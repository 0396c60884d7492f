#
# Conversion of numerals between the representation kinds.
#

from .context import get_context, InvalidInput
from .fixedpoint import complement, absolute_value, add_to_lowest_point, is_zero
from .numeral import (
    NumberType, Numeral, PLUS, MINUS, top_digit, is_complement_kind, sign_multiplier,
    standardize, trim_number,
)


__all__ = ('convert_to_type', 'to_unsigned', 'to_signed', 'to_sign_magnitude',
           'to_ones_complement', 'to_twos_complement')


def convert_to_type(numeral, kind, standardized=False, log=True):
    '''Return numeral converted to the representation kind.

    Negative numbers lose their sign on conversion to UNSIGNED, with a warning.  Between
    OC and TC negative numbers are adjusted by one at the lowest digit; every other
    conversion goes through the magnitude.
    '''
    if not isinstance(numeral, Numeral):
        return InvalidInput('convert_to_type', 'missing operand').signal(log)
    kind = NumberType(kind)
    value = numeral.copy() if standardized else standardize(numeral, log)
    if value is None:
        return None
    if value.kind == kind:
        return value

    radix = value.radix
    negative = sign_multiplier(value) == -1
    if negative and {value.kind, kind} == {NumberType.OC, NumberType.TC}:
        value.kind = kind
        return add_to_lowest_point(value, 1 if kind == NumberType.TC else -1, True, log)

    magnitude = absolute_value(value, True, log)
    if magnitude is None:
        return None
    negative = negative and not is_zero(magnitude)

    if kind == NumberType.UNSIGNED:
        if negative:
            get_context().warn('convert_to_type', f'sign of {value} lost converting to '
                               f'unsigned', log)
        magnitude.sign = ''
    elif kind == NumberType.SIGNED:
        magnitude.sign = MINUS if negative else PLUS
    elif kind == NumberType.SMR:
        magnitude.sign = top_digit(radix) if negative else '0'
    else:
        magnitude.sign = '0'
    magnitude.kind = kind

    if is_complement_kind(kind) and negative:
        magnitude = complement(magnitude, True, log)
        if magnitude is None:
            return None
    return trim_number(magnitude)


def to_unsigned(numeral, standardized=False, log=True):
    return convert_to_type(numeral, NumberType.UNSIGNED, standardized, log)


def to_signed(numeral, standardized=False, log=True):
    return convert_to_type(numeral, NumberType.SIGNED, standardized, log)


def to_sign_magnitude(numeral, standardized=False, log=True):
    return convert_to_type(numeral, NumberType.SMR, standardized, log)


def to_ones_complement(numeral, standardized=False, log=True):
    return convert_to_type(numeral, NumberType.OC, standardized, log)


def to_twos_complement(numeral, standardized=False, log=True):
    return convert_to_type(numeral, NumberType.TC, standardized, log)
