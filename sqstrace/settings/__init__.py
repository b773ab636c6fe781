from ._config import config


__all__ = ["config"]
