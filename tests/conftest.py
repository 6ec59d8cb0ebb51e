"""
Root conftest for tests.

Ensures no trace ID leaks from one test into the next: the trace ID lives in
a ContextVar that tests set directly or through the middleware.
"""

from collections.abc import Iterator

import pytest

from libs.common.logging.context import clear_trace_id


@pytest.fixture(autouse=True)
def _reset_trace_id() -> Iterator[None]:
    clear_trace_id()
    yield
    clear_trace_id()
