"""ImagePig API client public surface."""

from .client import ImagePig
from .core import (
    APIResponse,
    ClientConfig,
    HttpError,
    ImageInput,
    ImagePigError,
    InlineBytes,
    InvalidInput,
    InvalidUrl,
    MissingData,
    Proportion,
    RemoteReference,
    UnexpectedResponse,
    UpscalingFactor,
)

__all__ = [
    "ImagePig",
    "APIResponse",
    "ClientConfig",
    "HttpError",
    "ImageInput",
    "ImagePigError",
    "InlineBytes",
    "InvalidInput",
    "InvalidUrl",
    "MissingData",
    "Proportion",
    "RemoteReference",
    "UnexpectedResponse",
    "UpscalingFactor",
]
