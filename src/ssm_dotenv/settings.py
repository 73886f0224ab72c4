"""
Loader configuration.
Holds the verbosity flag, the parameter name prefix and where to find things.
"""

from dataclasses import dataclass
import os
from typing import Optional

DEFAULT_REGION = "eu-west-3"
DEFAULT_DOTENV_PATH = ".env"

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


def resolve_region(region: Optional[str] = None) -> str:
    # Read at call time so a region coming from the .env file is honoured.
    return region or os.getenv("AWS_REGION") or DEFAULT_REGION


@dataclass
class LoaderConfig:
    verbose: bool = False
    prefix: str = ""
    region: Optional[str] = None
    dotenv_path: str = DEFAULT_DOTENV_PATH

    @staticmethod
    def from_env() -> "LoaderConfig":
        return LoaderConfig(
            verbose=_flag(os.getenv("SSM_DOTENV_VERBOSE")),
            prefix=os.getenv("SSM_DOTENV_PREFIX", ""),
            region=os.getenv("SSM_DOTENV_REGION") or None,
            dotenv_path=os.getenv("SSM_DOTENV_FILE") or DEFAULT_DOTENV_PATH,
        )
