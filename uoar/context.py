#
# Failure signalling and the per-thread execution context.
#
# Expected failures (bad digits, mismatched operands, exponents out of range) are
# signalled rather than raised.  Default handling records them on the current
# context and hands the caller a failure value to propagate.
#

import logging
import threading
from enum import IntEnum


__all__ = ('Context', 'DefaultContext', 'get_context', 'set_context', 'local_context',
           'HandlerKind',
           'UOARError', 'InvalidInput', 'InvalidDigit', 'InvalidRadix', 'InvalidNumber',
           'InvalidExponent', 'InvalidEncoding', 'IncompatibleOperands',
           'UnsupportedOperation', 'ExponentOutOfBounds', 'TooLarge', 'Overflow',
           'Underflow', 'DivisionByZero')


logger = logging.getLogger(__name__)


#
# Signals
#

class UOARError(ArithmeticError):
    '''All failures signalled by this package subclass from this.

    UOARError expects up to three arguments:

         def __init__(self, source, message, result=None):

    source names the operation that failed, message describes the failure, and result
    is what default handling delivers to the caller in place of a value.
    '''

    def __init__(self, source, message, result=None):
        super().__init__(source, message, result)

    @property
    def source(self):
        return self.args[0]

    @property
    def message(self):
        return self.args[1]

    @property
    def default_result(self):
        return self.args[2]

    def __str__(self):
        return f'{self.source}: {self.message}'

    def signal(self, log=True, context=None):
        '''Call to signal a failure.  This handles it according to the handler set for its
        class in the context and returns the failure value.  If log is False nothing is
        recorded.'''
        context = context or get_context()
        kind = context.handler(self.__class__)

        if log and kind != HandlerKind.NO_RECORD:
            context.errors.append(self)
            logger.debug('%s', self)
            if context.notify_error is not None:
                context.notify_error(self.source, self.message)

        if kind == HandlerKind.RAISE:
            raise self
        return self.default_result


class InvalidInput(UOARError):
    '''Signalled on empty or malformed input.'''


class InvalidDigit(InvalidInput):
    '''A character that is not a digit, or a digit value outside [0, 35].'''


class InvalidRadix(InvalidInput):
    '''A radix outside [2, 35].'''


class InvalidNumber(InvalidInput):
    '''Text or a numeral whose sign or digits do not fit its radix and kind.'''


class InvalidExponent(InvalidInput):
    '''An exponent that is not a decimal integer.'''


class InvalidEncoding(InvalidInput):
    '''A bit string with the wrong width or alphabet for its format.'''


class IncompatibleOperands(UOARError):
    '''Operands of different radix or representation kind.'''


class UnsupportedOperation(UOARError):
    '''An operation undefined for the operand's kind, e.g. complementing an UNSIGNED
    numeral.'''


class ExponentOutOfBounds(UOARError):
    '''Signalled when a normalized exponent falls outside the format's range.'''


class TooLarge(UOARError):
    '''The whole part does not fit the requested field.'''


class Overflow(UOARError):
    '''A carry out of the most significant digit that cannot be kept.'''


class Underflow(UOARError):
    '''A borrow past the most significant digit.'''


class DivisionByZero(UOARError, ZeroDivisionError):
    '''Division with a zero divisor.'''


class HandlerKind(IntEnum):
    '''Indicates how a signalled failure should be handled.'''
    # Record the failure on the context and return the failure value
    DEFAULT = 0

    # Return the failure value without recording anything
    NO_RECORD = 1

    # Raise the exception immediately
    RAISE = 2


class Context:
    '''The execution context for operations.  Carries the recorded errors, warnings and
    algorithm steps, the optional sinks they are forwarded to, and per-class handlers.'''

    __slots__ = ('handlers', 'errors', 'warnings', 'steps', 'record_steps',
                 'notify_error', 'append_step')

    def __init__(self, *, record_steps=False, notify_error=None, append_step=None):
        '''notify_error, if given, is called as notify_error(source, message) for every
        recorded failure.  append_step, if given, receives each step text of the
        algorithms; steps are kept in the steps list only if record_steps is True.
        '''
        self.handlers = {}
        self.errors = []
        self.warnings = []
        self.steps = []
        self.record_steps = record_steps
        self.notify_error = notify_error
        self.append_step = append_step

    def copy(self):
        '''Return a copy of the context.  The recorded lists and handlers are copied; the
        sinks are shared.'''
        result = Context(record_steps=self.record_steps, notify_error=self.notify_error,
                         append_step=self.append_step)
        result.handlers = dict(self.handlers)
        result.errors = list(self.errors)
        result.warnings = list(self.warnings)
        result.steps = list(self.steps)
        return result

    def set_handler(self, exc_classes, kind):
        classes = (exc_classes, ) if not isinstance(exc_classes, (tuple, list)) else exc_classes
        if not all(issubclass(exc_class, UOARError) for exc_class in classes):
            raise TypeError('all exception classes must be subclasses of UOARError')
        if not isinstance(kind, HandlerKind):
            raise TypeError('kind must be a HandlerKind instance')
        for exc_class in classes:
            self.handlers[exc_class] = kind

    def handler(self, exc_class):
        '''Return the HandlerKind for a signal class.'''
        if not issubclass(exc_class, UOARError):
            raise TypeError('exc_class must be a subclass of UOARError')

        for cls in exc_class.mro():
            kind = self.handlers.get(cls)
            if kind is not None:
                return kind

        return HandlerKind.DEFAULT

    @property
    def first_error(self):
        return self.errors[0] if self.errors else None

    @property
    def last_error(self):
        return self.errors[-1] if self.errors else None

    def warn(self, source, message, log=True):
        '''Record a non-fatal warning.'''
        if log:
            self.warnings.append((source, message))
            logger.info('%s: %s', source, message)

    def step(self, text):
        '''Record one human-readable step of an algorithm.'''
        logger.debug('%s', text)
        if self.record_steps:
            self.steps.append(text)
        if self.append_step is not None:
            self.append_step(text)

    def clear(self):
        '''Forget recorded errors, warnings and steps.'''
        self.errors.clear()
        self.warnings.clear()
        self.steps.clear()

    def __repr__(self):
        return (f'<Context errors={len(self.errors)} warnings={len(self.warnings)} '
                f'record_steps={self.record_steps}>')


#
# Exported functions
#

# Each thread starts from a copy of this, so handlers set on it apply to new threads.
DefaultContext = Context()
_thread_state = threading.local()


def get_context():
    '''Return the context that operations on this thread record errors, warnings and
    steps on.  A thread's first call gets its own copy of DefaultContext.'''
    context = getattr(_thread_state, 'context', None)
    if context is None:
        context = _thread_state.context = DefaultContext.copy()
    return context


def set_context(context):
    '''Make context, itself and not a copy, the current thread's context.'''
    _thread_state.context = context


class LocalContext:
    '''Run a block of operations against a fresh context.

    On entry the current thread's context is replaced by a copy of context, or of the
    current context when none is given, so errors, warnings and steps recorded inside
    the block land on the copy; the copy is returned as the with-target.  On exit the
    previous context is restored untouched.
    '''

    def __init__(self, context=None):
        self.context = context
        self.saved = None

    def __enter__(self):
        self.saved = get_context()
        scoped = (self.context or self.saved).copy()
        set_context(scoped)
        return scoped

    def __exit__(self, exc_type, exc_value, traceback):
        set_context(self.saved)


local_context = LocalContext
