"""
Configuration resolution: .env file first, then SSM Parameter Store.

Local environment variables always win. A value from Parameter Store is only
written to ``os.environ`` when the variable is unset or empty.
"""

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from ssm_dotenv.exceptions import ClientUnavailableError, ParameterStoreError
from ssm_dotenv.settings import LoaderConfig, resolve_region
from ssm_dotenv.ssm_client import ParameterStoreClient, build_client

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], ParameterStoreClient]


@dataclass(frozen=True)
class ClientState:
    client: Optional[ParameterStoreClient] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.client is not None


class SSMDotenv:
    """
    Loads configuration from a .env file and SSM Parameter Store.

    The SSM client is built on first remote access and cached, including a
    failed construction: an unavailable client is never retried, and every
    remote operation then falls back to its default.
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        client: Optional[ParameterStoreClient] = None,
        client_factory: ClientFactory = build_client,
    ):
        self.config = config or LoaderConfig()
        self._client_factory = client_factory
        self._state: Optional[ClientState] = ClientState(client=client) if client is not None else None
        self._state_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_verbose(self, verbose: bool) -> None:
        self.config.verbose = verbose

    def set_prefix(self, prefix: str) -> None:
        self.config.prefix = prefix

    def _log(self, msg: str, *args) -> None:
        if self.config.verbose:
            logger.info(msg, *args)

    # ------------------------------------------------------------------
    # Client handle
    # ------------------------------------------------------------------
    @property
    def client_state(self) -> ClientState:
        if self._state is not None:
            return self._state

        with self._state_lock:
            if self._state is not None:
                return self._state

            region = resolve_region(self.config.region)
            try:
                self._state = ClientState(client=self._client_factory(region))
            except ClientUnavailableError as e:
                self._log("%s", e)
                self._state = ClientState(error=str(e))
            return self._state

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def load(self, *paths: str, stop_on_error: bool = True) -> int:
        """
        Load the .env file, then every parameter found under ``paths``.

        The path is stripped from each parameter name to get the variable
        name (``/app/FOO`` under ``/app/`` becomes ``FOO``). Variables that
        are already set and non-empty are left alone.

        A failing page abandons the current path and, unless
        ``stop_on_error`` is False, every path after it. Variables set before
        the failure are kept.

        Returns the number of variables set from Parameter Store.
        """
        self._load_dotenv()

        state = self.client_state
        if not state.available:
            return 0

        total = 0
        for path in paths:
            count = 0
            try:
                for page in state.client.iter_parameter_pages(path):
                    for param in page:
                        name = param.name[len(path):]
                        if not name or os.getenv(name):
                            continue
                        self._log("Loaded parameter: %s", name)
                        os.environ[name] = param.value
                        count += 1
            except ParameterStoreError as e:
                self._log("Error getting parameters: %s", e)
                total += count
                if stop_on_error:
                    return total
                continue

            if count == 0:
                self._log("No parameters loaded from SSM for path %s", path)
            total += count

        return total

    def _load_dotenv(self) -> None:
        dotenv_path = Path(self.config.dotenv_path)
        if not dotenv_path.is_file():
            self._log(".env file not found")
            return
        try:
            load_dotenv(dotenv_path, override=False)
        except (OSError, UnicodeDecodeError) as e:
            self._log("Can't read .env file: %s", e)

    def env(self, key: str, default: str = "") -> str:
        """Value of ``key`` in the environment, or ``default`` when unset or empty."""
        return os.getenv(key) or default

    def get_parameter(self, name: str, default: str = "") -> str:
        """
        Fetch ``prefix + name`` from Parameter Store, decrypted.
        Returns ``default`` when there is no client or the fetch fails.
        The environment is not modified.
        """
        state = self.client_state
        if not state.available:
            return default

        full_name = self.config.prefix + name
        try:
            return state.client.get_parameter(full_name)
        except ParameterStoreError as e:
            self._log("Unable to get parameter: %s %s", full_name, e)
            return default
