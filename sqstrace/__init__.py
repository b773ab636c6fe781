from ._logger import configure_sqstrace_logger


# configure sqstrace logger before other modules log
configure_sqstrace_logger()  # noqa: E402

from .context import Context  # noqa: E402
from .contrib.sqs import of_system_attributes  # noqa: E402
from .settings._config import config  # noqa: E402
from .version import __version__  # noqa: E402


__all__ = [
    "Context",
    "config",
    "of_system_attributes",
    "__version__",
]
