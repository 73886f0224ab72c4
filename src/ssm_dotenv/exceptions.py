"""
Exception classes shared by the parameter store client and the loader.
"""


class SSMDotenvError(Exception):
    """Base class for ssm-dotenv errors."""


class ClientUnavailableError(SSMDotenvError):
    """Raised when the SSM client cannot be constructed."""


class ParameterStoreError(SSMDotenvError):
    """Raised when a call to Parameter Store fails."""


class ParameterNotFoundError(ParameterStoreError):
    """Raised when the requested parameter does not exist."""
