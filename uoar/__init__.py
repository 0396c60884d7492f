#
# Arbitrary radix fixed-point numerals, their representations and arithmetic, and the
# IEEE 754 binary, decimal and hexadecimal codecs.
#

from .context import *
from .numeral import *
from .fixedpoint import *
from .representation import *
from .base import *
from .algorithms import *
from .ieee754 import *
from .ieee754_arithmetic import *

from . import (
    context, numeral, fixedpoint, representation, base, algorithms, ieee754,
    ieee754_arithmetic,
)


__all__ = (context.__all__ + numeral.__all__ + fixedpoint.__all__ + representation.__all__
           + base.__all__ + algorithms.__all__ + ieee754.__all__ + ieee754_arithmetic.__all__)
