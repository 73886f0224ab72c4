import os
from typing import Dict, Iterator, List, Optional

import pytest

from ssm_dotenv import LoaderConfig, SSMDotenv
from ssm_dotenv.exceptions import ParameterNotFoundError, ParameterStoreError
from ssm_dotenv.ssm_client import Parameter


class FakeParameterStore:
    """In-memory ParameterStoreClient. Records every call it receives."""

    def __init__(
        self,
        params: Optional[Dict[str, str]] = None,
        page_size: int = 10,
        failing_paths: Optional[Dict[str, int]] = None,
    ):
        self.params = dict(params or {})
        self.page_size = page_size
        # path -> number of pages served before the listing fails
        self.failing_paths = failing_paths or {}
        self.requested: List[str] = []
        self.listed: List[str] = []

    def get_parameter(self, name: str) -> str:
        self.requested.append(name)
        if name not in self.params:
            raise ParameterNotFoundError(f"Parameter not found: {name}")
        return self.params[name]

    def iter_parameter_pages(self, path: str) -> Iterator[List[Parameter]]:
        self.listed.append(path)
        matches = [Parameter(n, v) for n, v in self.params.items() if n.startswith(path)]
        pages = [
            matches[i:i + self.page_size] for i in range(0, len(matches), self.page_size)
        ] or [[]]
        fail_at = self.failing_paths.get(path)
        for i, page in enumerate(pages):
            if fail_at == i:
                raise ParameterStoreError(f"Failed to list parameters under {path}")
            yield page
        if fail_at is not None and fail_at >= len(pages):
            raise ParameterStoreError(f"Failed to list parameters under {path}")


@pytest.fixture(autouse=True)
def isolated_environ(tmp_path, monkeypatch):
    """Run each test in an empty directory and restore os.environ afterwards."""
    monkeypatch.chdir(tmp_path)
    saved = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def make_loader():
    def _make(params=None, **kwargs):
        store = FakeParameterStore(params, **kwargs)
        return SSMDotenv(LoaderConfig(verbose=True), client=store), store
    return _make
