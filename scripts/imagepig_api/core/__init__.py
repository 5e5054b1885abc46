"""Core contracts and helpers."""

from .contracts import (
    ClientConfig,
    ImageInput,
    InlineBytes,
    Proportion,
    RemoteReference,
    UpscalingFactor,
)
from .errors import (
    HttpError,
    ImagePigError,
    InvalidInput,
    InvalidUrl,
    MissingData,
    UnexpectedResponse,
)
from .response import APIResponse

__all__ = [
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
