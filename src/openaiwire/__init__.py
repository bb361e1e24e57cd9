"""
openaiwire - Typed client binding for the OpenAI REST API
Provides immutable request builders, tagged-union response models and thin operation declarations.
"""

from ._exceptions import BuildError, DecodeError, TransportError
from ._http import AsyncBinaryResponse, BinaryResponse
from ._wire import AUTO, decode, encode
from .client import AsyncOpenAIClient, OpenAIClient
from .config import Configuration

__version__ = "0.1.0"

__all__ = [
    "OpenAIClient",
    "AsyncOpenAIClient",
    "Configuration",
    "BuildError",
    "DecodeError",
    "TransportError",
    "BinaryResponse",
    "AsyncBinaryResponse",
    "AUTO",
    "encode",
    "decode",
    "__version__",
]
