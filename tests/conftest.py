import pytest

import sqstrace.internal.logger


@pytest.fixture(autouse=True)
def reset_log_buckets():
    sqstrace.internal.logger._buckets.clear()
    yield
    sqstrace.internal.logger._buckets.clear()
