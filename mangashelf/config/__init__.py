import os

from mangashelf.config.base import BaseConfig, DevelopmentConfig, TestingConfig


DEFAULT_LOG_LEVEL = "INFO"


def log_level_name() -> str:
    return (os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


__all__ = [
    "BaseConfig",
    "DevelopmentConfig",
    "TestingConfig",
    "log_level_name",
]
