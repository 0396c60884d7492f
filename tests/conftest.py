import pytest

from uoar import *


# A fresh context for each test, so recorded errors, warnings and steps are the test's own
@pytest.fixture
def context():
    with local_context(Context()) as context:
        yield context


# Every signalled failure raises
@pytest.fixture
def raising_context():
    with local_context(Context()) as context:
        context.set_handler(UOARError, HandlerKind.RAISE)
        yield context
