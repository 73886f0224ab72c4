"""
Parameter Store access.

``ParameterStoreClient`` is the small capability the loader depends on:
fetch one parameter by name, or page through every parameter under a path.
``AWSParameterStoreClient`` backs it with boto3; tests swap in a fake.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ssm_dotenv.exceptions import (
    ClientUnavailableError,
    ParameterNotFoundError,
    ParameterStoreError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parameter:
    name: str   # full name, path included
    value: str  # decrypted


class ParameterStoreClient(Protocol):
    def get_parameter(self, name: str) -> str:
        ...

    def iter_parameter_pages(self, path: str) -> Iterator[List[Parameter]]:
        ...


def _error_code(err: ClientError) -> str:
    return err.response.get("Error", {}).get("Code", "")


class AWSParameterStoreClient:
    """boto3-backed Parameter Store client. Decryption is always on."""

    def __init__(self, client: Any):
        self.client = client

    def get_parameter(self, name: str) -> str:
        try:
            resp = self.client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            if _error_code(e) == "ParameterNotFound":
                raise ParameterNotFoundError(f"Parameter not found: {name}") from e
            raise ParameterStoreError(f"Failed to get parameter {name}: {e}") from e
        except BotoCoreError as e:
            raise ParameterStoreError(f"Failed to get parameter {name}: {e}") from e
        return resp["Parameter"]["Value"]

    def iter_parameter_pages(self, path: str) -> Iterator[List[Parameter]]:
        """
        Yield one list of parameters per page under ``path`` (recursive).
        A new paginator is created on every call.
        """
        paginator = self.client.get_paginator("get_parameters_by_path")
        pages = paginator.paginate(Path=path, Recursive=True, WithDecryption=True)
        try:
            for page in pages:
                yield [
                    Parameter(name=p["Name"], value=p["Value"])
                    for p in page.get("Parameters", [])
                ]
        except (ClientError, BotoCoreError) as e:
            raise ParameterStoreError(f"Failed to list parameters under {path}: {e}") from e


def build_client(region: str) -> AWSParameterStoreClient:
    """Create the boto3 SSM client for ``region``; credentials use the default chain."""
    logger.debug("Creating SSM client for region %s", region)
    try:
        return AWSParameterStoreClient(boto3.client("ssm", region_name=region))
    except (BotoCoreError, ClientError, ValueError) as e:
        raise ClientUnavailableError(f"Can't create AWS SSM client: {e}") from e
