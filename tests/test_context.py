import threading

import pytest

from uoar import *


class TestSignals:

    @pytest.mark.parametrize('exc_class', (InvalidDigit, InvalidRadix, InvalidNumber,
                                           InvalidExponent, InvalidEncoding))
    def test_invalid_input_family(self, exc_class):
        assert issubclass(exc_class, InvalidInput)
        assert issubclass(exc_class, UOARError)

    def test_hierarchy(self):
        assert issubclass(UOARError, ArithmeticError)
        assert issubclass(DivisionByZero, UOARError)
        assert issubclass(DivisionByZero, ZeroDivisionError)
        for exc_class in (IncompatibleOperands, UnsupportedOperation, ExponentOutOfBounds,
                          TooLarge, Overflow, Underflow):
            assert not issubclass(exc_class, InvalidInput)

    def test_attributes(self):
        error = InvalidDigit('digit_value', 'invalid digit', 5)
        assert error.source == 'digit_value'
        assert error.message == 'invalid digit'
        assert error.default_result == 5
        assert str(error) == 'digit_value: invalid digit'
        assert InvalidDigit('a', 'b').default_result is None

    def test_signal_records(self, context):
        assert InvalidInput('parse', 'empty input').signal() is None
        assert len(context.errors) == 1
        assert isinstance(context.first_error, InvalidInput)
        assert context.first_error is context.last_error

    def test_signal_result(self, context):
        assert IncompatibleOperands('add', 'bad', False).signal() is False

    def test_signal_no_log(self, context):
        assert InvalidInput('parse', 'empty input').signal(log=False) is None
        assert not context.errors

    def test_signal_explicit_context(self, context):
        other = Context()
        InvalidInput('parse', 'empty input').signal(context=other)
        assert len(other.errors) == 1
        assert not context.errors

    def test_notify_error(self):
        messages = []
        with local_context(Context(notify_error=lambda *args: messages.append(args))):
            TooLarge('pad_whole_to', 'too long').signal()
        assert messages == [('pad_whole_to', 'too long')]

    def test_order_kept(self, context):
        InvalidDigit('first', 'one').signal()
        Underflow('second', 'two').signal()
        assert [error.source for error in context.errors] == ['first', 'second']
        assert context.first_error.source == 'first'
        assert context.last_error.source == 'second'


class TestHandlers:

    def test_default(self, context):
        assert context.handler(InvalidDigit) == HandlerKind.DEFAULT

    def test_raise(self, context):
        context.set_handler(InvalidDigit, HandlerKind.RAISE)
        with pytest.raises(InvalidDigit):
            InvalidDigit('digit_value', 'invalid digit').signal()
        # Still recorded before raising
        assert len(context.errors) == 1

    def test_no_record(self, context):
        context.set_handler((InvalidDigit, Underflow), HandlerKind.NO_RECORD)
        assert InvalidDigit('digit_value', 'invalid digit').signal() is None
        assert Underflow('add_to_lowest_point', 'borrow').signal() is None
        assert not context.errors

    def test_inherited(self, context):
        context.set_handler(InvalidInput, HandlerKind.RAISE)
        assert context.handler(InvalidRadix) == HandlerKind.RAISE
        assert context.handler(TooLarge) == HandlerKind.DEFAULT

    def test_most_specific_wins(self, context):
        context.set_handler(UOARError, HandlerKind.RAISE)
        context.set_handler(InvalidDigit, HandlerKind.NO_RECORD)
        assert context.handler(InvalidDigit) == HandlerKind.NO_RECORD
        assert context.handler(InvalidRadix) == HandlerKind.RAISE

    def test_raising_context(self, raising_context):
        with pytest.raises(InvalidDigit):
            digit_value('?')

    @pytest.mark.parametrize('exc_class', (ValueError, ZeroDivisionError))
    def test_bad_class(self, exc_class, context):
        with pytest.raises(TypeError):
            context.set_handler(exc_class, HandlerKind.RAISE)
        with pytest.raises(TypeError):
            context.handler(exc_class)

    @pytest.mark.parametrize('kind', (2, None))
    def test_bad_kind(self, kind, context):
        with pytest.raises(TypeError):
            context.set_handler(InvalidDigit, kind)


class TestContext:

    def test_copy(self, context):
        context.set_handler(TooLarge, HandlerKind.RAISE)
        context.warn('get_sign', 'no sign')
        context.step('one')
        sink = []
        context.append_step = sink.append
        c = context.copy()
        assert c.handlers == context.handlers
        assert c.handlers is not context.handlers
        assert c.warnings == context.warnings
        assert c.warnings is not context.warnings
        assert c.steps is not context.steps
        assert c.append_step == sink.append

    def test_get_context(self):
        context = get_context()
        assert context is not DefaultContext
        assert get_context() is context

        def target():
            thread_context = get_context()
            assert thread_context not in (context, DefaultContext)
            event.set()

        event = threading.Event()
        thread = threading.Thread(target=target)
        thread.start()
        event.wait()

    def test_set_context(self):
        saved = get_context()
        context = Context(record_steps=True)
        try:
            set_context(context)
            assert get_context() is context
        finally:
            set_context(saved)

    def test_local_context(self):
        saved = get_context()
        template = Context(record_steps=True)
        with local_context(template) as context:
            assert get_context() is context
            assert context is not template
            assert context.record_steps
        assert get_context() is saved

    def test_local_context_omitted(self):
        saved = get_context()
        error_count = len(saved.errors)
        with local_context() as context:
            assert context is not saved
            InvalidInput('parse', 'empty input').signal()
            assert len(context.errors) == error_count + 1
        assert get_context() is saved
        assert len(saved.errors) == error_count

    def test_warn(self, context):
        context.warn('get_sign', 'no sign given')
        context.warn('get_sign', 'ignored', log=False)
        assert context.warnings == [('get_sign', 'no sign given')]
        assert not context.errors

    def test_steps(self):
        sink = []
        with local_context(Context(append_step=sink.append)) as context:
            context.step('A = 0000')
            assert not context.steps
        with local_context(Context(record_steps=True)) as context:
            context.step('A = 0000')
            assert context.steps == ['A = 0000']
        assert sink == ['A = 0000']

    def test_clear(self, context):
        InvalidInput('parse', 'empty').signal()
        context.warn('get_sign', 'no sign')
        context.clear()
        assert not context.errors and not context.warnings and not context.steps
        assert context.first_error is None and context.last_error is None

    def test_repr(self, context):
        assert repr(context) == '<Context errors=0 warnings=0 record_steps=False>'
