"""Load configuration from a .env file and AWS SSM Parameter Store."""

__version__ = "0.1.0"

from .exceptions import (
    ClientUnavailableError,
    ParameterNotFoundError,
    ParameterStoreError,
    SSMDotenvError,
)
from .settings import LoaderConfig
from .ssm_client import AWSParameterStoreClient, Parameter, ParameterStoreClient, build_client
from .ssm_config import ClientState, SSMDotenv

# Process-wide loader behind the module-level functions.
_default = SSMDotenv(LoaderConfig.from_env())


def default_loader() -> SSMDotenv:
    return _default


def set_verbose(verbose: bool) -> None:
    """Enable or disable the loader's log output."""
    _default.set_verbose(verbose)


def set_prefix(prefix: str) -> None:
    """Set the prefix prepended to names passed to ``get_parameter``."""
    _default.set_prefix(prefix)


def load(*paths: str, stop_on_error: bool = True) -> int:
    return _default.load(*paths, stop_on_error=stop_on_error)


def env(key: str, default: str = "") -> str:
    return _default.env(key, default)


def get_parameter(name: str, default: str = "") -> str:
    return _default.get_parameter(name, default)


__all__ = [
    "AWSParameterStoreClient",
    "ClientState",
    "ClientUnavailableError",
    "LoaderConfig",
    "Parameter",
    "ParameterNotFoundError",
    "ParameterStoreClient",
    "ParameterStoreError",
    "SSMDotenv",
    "SSMDotenvError",
    "build_client",
    "default_loader",
    "env",
    "get_parameter",
    "load",
    "set_prefix",
    "set_verbose",
]
