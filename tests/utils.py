import contextlib
import os

from sqstrace.settings._config import SQSTraceConfig


@contextlib.contextmanager
def override_env(env, replace_os_env=False):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(SQSTRACE_DEBUG="true")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # We allow callers to clear out the environment to prevent leaking variables into the test
    if replace_os_env:
        os.environ.clear()

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


@contextlib.contextmanager
def override_config(env, modules):
    """
    Temporarily replace the ``config`` of ``modules`` with one loaded from ``env``::

        >>> with override_config(dict(SQSTRACE_SQS_DISTRIBUTED_TRACING="false"), [parent_context]):
            # Your test
    """
    with override_env(env):
        config = SQSTraceConfig()

    originals = [(module, module.config) for module in modules]
    for module in modules:
        module.config = config
    try:
        yield config
    finally:
        for module, original in originals:
            module.config = original
