# type: ignore
from typing import List  # noqa
from typing import Tuple  # noqa

from riot import Venv


latest = ""


SUPPORTED_PYTHON_VERSIONS: List[Tuple[int, int]] = [
    (3, 8),
    (3, 9),
    (3, 10),
    (3, 11),
    (3, 12),
    (3, 13),
]


def version_to_str(version: Tuple[int, int]) -> str:
    """Convert a Python version tuple to a string

    >>> version_to_str((3, 8))
    '3.8'
    >>> version_to_str((3, ))
    '3'
    """
    return ".".join(str(p) for p in version)


def str_to_version(version: str) -> Tuple[int, int]:
    """Convert a Python version string to a tuple

    >>> str_to_version("3.8")
    (3, 8)
    >>> str_to_version("3")
    (3,)
    """
    return tuple(int(p) for p in version.split("."))


MIN_PYTHON_VERSION = version_to_str(min(SUPPORTED_PYTHON_VERSIONS))
MAX_PYTHON_VERSION = version_to_str(max(SUPPORTED_PYTHON_VERSIONS))


def select_pys(min_version: str = MIN_PYTHON_VERSION, max_version: str = MAX_PYTHON_VERSION) -> List[str]:
    """Helper to select python versions from the list of versions we support

    >>> select_pys(min_version='3.8', max_version='3.9')
    ['3.8', '3.9']
    """
    min_version = str_to_version(min_version)
    max_version = str_to_version(max_version)

    return [version_to_str(version) for version in SUPPORTED_PYTHON_VERSIONS if min_version <= version <= max_version]


venv = Venv(
    pkgs={
        "mock": latest,
        "pytest": latest,
        "coverage": latest,
        "pytest-cov": latest,
    },
    env={
        "SQSTRACE_LOG_STREAM_HANDLER": "false",
    },
    venvs=[
        Venv(
            name="tracer",
            command="pytest -v {cmdargs} tests/ --ignore=tests/opentelemetry",
            venvs=[
                Venv(pys=select_pys()),
                # sqstrace logger at DEBUG, without log rate limiting
                Venv(pys=MAX_PYTHON_VERSION, env={"SQSTRACE_DEBUG": "true"}),
            ],
        ),
        Venv(
            name="opentelemetry",
            command="pytest -v {cmdargs} tests/opentelemetry",
            pys=select_pys(),
            pkgs={
                "opentelemetry-api": ["~=1.15.0", latest],
            },
        ),
    ],
)
