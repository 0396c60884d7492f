import pytest

from uoar import *


SIGNED = NumberType.SIGNED
UNSIGNED = NumberType.UNSIGNED
SMR = NumberType.SMR
OC = NumberType.OC
TC = NumberType.TC


class TestToDecimal:

    @pytest.mark.parametrize('numeral, result', (
        (Numeral('+', '1010', '1', 2, SIGNED), Numeral('+', '10', '5', 10, SIGNED)),
        (Numeral('', 'FF', '8', 16, UNSIGNED), Numeral('', '255', '5', 10, UNSIGNED)),
        (Numeral('+', '0', '10101', 2, SIGNED), Numeral('+', '0', '65625', 10, SIGNED)),
        (Numeral('-', '17', '4', 8, SIGNED), Numeral('-', '15', '5', 10, SIGNED)),
        (Numeral('', '0', '1', 3, UNSIGNED), Numeral('', '0', '33333333', 10, UNSIGNED)),
        (Numeral('', 'Y', '', 35, UNSIGNED), Numeral('', '34', '', 10, UNSIGNED)),
        (Numeral('1', '010', '', 2, TC), Numeral('9', '4', '', 10, TC)),
        (Numeral('0', '110', '', 2, TC), Numeral('0', '6', '', 10, TC)),
        (Numeral('1', '110', '', 2, SMR), Numeral('9', '6', '', 10, SMR)),
    ))
    def test_to_decimal(self, numeral, result):
        assert to_decimal(numeral) == result

    def test_decimal_unchanged(self):
        numeral = Numeral('+', '012', '50', 10, SIGNED)
        assert to_decimal(numeral) == Numeral('+', '12', '5', 10, SIGNED)

    def test_invalid(self, context):
        assert to_decimal(Numeral('+', '102', '', 2, SIGNED)) is None
        assert isinstance(context.last_error, InvalidNumber)
        assert to_decimal('101') is None
        assert isinstance(context.last_error, InvalidInput)


class TestFromDecimal:

    @pytest.mark.parametrize('numeral, radix, result', (
        (Numeral('+', '10', '5', 10, SIGNED), 2, Numeral('+', '1010', '1', 2, SIGNED)),
        (Numeral('+', '0', '125', 10, SIGNED), 2, Numeral('+', '0', '001', 2, SIGNED)),
        (Numeral('', '255', '', 10, UNSIGNED), 16, Numeral('', 'FF', '', 16, UNSIGNED)),
        (Numeral('+', '0', '1', 10, SIGNED), 2, Numeral('+', '0', '00011001', 2, SIGNED)),
        (Numeral('-', '15', '5', 10, SIGNED), 8, Numeral('-', '17', '4', 8, SIGNED)),
        (Numeral('9', '4', '', 10, TC), 2, Numeral('1', '010', '', 2, TC)),
        (Numeral('9', '6', '', 10, SMR), 2, Numeral('1', '110', '', 2, SMR)),
        (Numeral('', '34', '', 10, UNSIGNED), 35, Numeral('', 'Y', '', 35, UNSIGNED)),
    ))
    def test_from_decimal(self, numeral, radix, result):
        assert from_decimal(numeral, radix) == result

    @pytest.mark.parametrize('numeral', (
        Numeral('+', '10', '5', 10, SIGNED),
        Numeral('-', '255', '', 10, SIGNED),
        Numeral('9', '4', '', 10, TC),
        Numeral('', '0', '625', 10, UNSIGNED),
    ))
    @pytest.mark.parametrize('radix', (2, 8, 16))
    def test_round_trip(self, numeral, radix):
        assert to_decimal(from_decimal(numeral, radix)) == numeral

    @pytest.mark.parametrize('numeral, radix', (
        (Numeral('+', '1010', '', 2, SIGNED), 16),
        (Numeral('+', '10', '', 10, SIGNED), 36),
        (Numeral('+', '10', '', 10, SIGNED), 1),
    ))
    def test_invalid_radix(self, numeral, radix, context):
        assert from_decimal(numeral, radix) is None
        assert isinstance(context.last_error, InvalidRadix)


class TestConvertBases:

    @pytest.mark.parametrize('numeral, radix, result', (
        (Numeral('', 'FF', '8', 16, UNSIGNED), 2, Numeral('', '11111111', '1', 2, UNSIGNED)),
        (Numeral('+', '17', '4', 8, SIGNED), 16, Numeral('+', 'F', '8', 16, SIGNED)),
        (Numeral('1', '010', '', 2, TC), 8, Numeral('7', '2', '', 8, TC)),
        (Numeral('+', '012', '', 16, SIGNED), 16, Numeral('+', '12', '', 16, SIGNED)),
    ))
    def test_convert_bases(self, numeral, radix, result):
        assert convert_bases(numeral, radix) == result


class TestBinary:

    @pytest.mark.parametrize('value, width, result', (
        (5, 0, '101'),
        (5, 8, '00000101'),
        (0, 0, '0'),
        (255, 4, '11111111'),
    ))
    def test_int_to_binary(self, value, width, result):
        assert int_to_binary(value, width) == result

    @pytest.mark.parametrize('value', (-1, 1.5, '5'))
    def test_int_to_binary_invalid(self, value, context):
        assert int_to_binary(value) is None
        assert isinstance(context.last_error, InvalidInput)

    @pytest.mark.parametrize('bits, result', (
        ('0101', 5),
        ('0', 0),
        ('11111111', 255),
    ))
    def test_binary_to_int(self, bits, result):
        assert binary_to_int(bits) == result

    @pytest.mark.parametrize('bits', ('', '012', None))
    def test_binary_to_int_invalid(self, bits, context):
        assert binary_to_int(bits) is None
        assert isinstance(context.last_error, InvalidNumber)


class TestBCD:

    @pytest.mark.parametrize('digits, bits', (
        ('986', '100110000110'),
        ('0', '0000'),
        ('0123456789', '0000000100100011010001010110011110001001'),
    ))
    def test_8421(self, digits, bits):
        assert decimal_to_8421(digits) == bits
        assert decimal_from_8421(bits) == digits

    @pytest.mark.parametrize('bits, digits', (
        ('101', '5'),
        ('1100001', '61'),
        ('1111', 'F'),
    ))
    def test_from_8421(self, bits, digits):
        assert decimal_from_8421(bits) == digits

    @pytest.mark.parametrize('digits, exc_class', (
        ('12A', InvalidDigit),
        ('1.5', InvalidDigit),
        ('', InvalidInput),
    ))
    def test_to_8421_invalid(self, digits, exc_class, context):
        assert decimal_to_8421(digits) is None
        assert isinstance(context.last_error, exc_class)

    def test_from_8421_invalid(self, context):
        assert decimal_from_8421('1021') is None
        assert isinstance(context.last_error, InvalidNumber)
