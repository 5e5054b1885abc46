"""Core data contracts for the ImagePig client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, MutableMapping, Union

from .errors import InvalidInput, InvalidUrl
from .utils import decode_base64, is_absolute_url


DEFAULT_API_URL = "https://api.imagepig.com"
DEFAULT_REQUEST_TIMEOUT = 60.0
DEFAULT_DOWNLOAD_TIMEOUT = 60.0


@dataclass(frozen=True)
class RemoteReference:
    """Image input pointing at a publicly reachable URL."""

    url: str

    def prepare(self, prefix: str, params: MutableMapping[str, Any]) -> None:
        if not is_absolute_url(self.url):
            raise InvalidUrl(self.url)
        params[f"{prefix}_url"] = self.url


@dataclass(frozen=True)
class InlineBytes:
    """Image input carried in the request body as base64 encoded bytes."""

    data: bytes = field(repr=False)

    def prepare(self, prefix: str, params: MutableMapping[str, Any]) -> None:
        try:
            decoded = decode_base64(self.data)
        except ValueError as exc:
            raise InvalidInput() from exc
        params[f"{prefix}_data"] = decoded


ImageInput = Union[RemoteReference, InlineBytes]


def as_image_input(value: Union[ImageInput, str, bytes, bytearray]) -> ImageInput:
    if isinstance(value, (RemoteReference, InlineBytes)):
        return value
    if isinstance(value, str):
        return RemoteReference(value)
    if isinstance(value, (bytes, bytearray)):
        return InlineBytes(bytes(value))
    raise TypeError(f"Unsupported image input type: {type(value)}")


class Proportion(Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"
    WIDE = "wide"

    @property
    def wire_value(self) -> str:
        return _PROPORTION_WIRE[self]

    @classmethod
    def parse(cls, value: Union["Proportion", str]) -> "Proportion":
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member, token in _PROPORTION_WIRE.items():
            if token == key:
                return member
        raise ValueError(f"Unknown proportion '{value}'")


class UpscalingFactor(Enum):
    TWO = "two"
    FOUR = "four"
    EIGHT = "eight"

    @property
    def wire_value(self) -> int:
        return _UPSCALING_WIRE[self]

    @classmethod
    def parse(cls, value: Union["UpscalingFactor", int]) -> "UpscalingFactor":
        if isinstance(value, cls):
            return value
        for member, factor in _UPSCALING_WIRE.items():
            if not isinstance(value, bool) and factor == value:
                return member
        raise ValueError(f"Unsupported upscaling factor '{value}'")


_PROPORTION_WIRE: Dict[Proportion, str] = {
    Proportion.LANDSCAPE: "landscape",
    Proportion.PORTRAIT: "portrait",
    Proportion.SQUARE: "square",
    Proportion.WIDE: "wide",
}

_UPSCALING_WIRE: Dict[UpscalingFactor, int] = {
    UpscalingFactor.TWO: 2,
    UpscalingFactor.FOUR: 4,
    UpscalingFactor.EIGHT: 8,
}


@dataclass(frozen=True)
class ClientConfig:
    api_key: str = field(repr=False)
    api_url: str = DEFAULT_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must not be empty.")
        object.__setattr__(self, "api_url", (self.api_url or DEFAULT_API_URL).rstrip("/"))

    @classmethod
    def from_env(cls) -> "ClientConfig":
        api_key = os.getenv("IMAGEPIG_API_KEY")
        if not api_key:
            raise RuntimeError("IMAGEPIG_API_KEY must be set.")
        return cls(api_key=api_key, api_url=os.getenv("IMAGEPIG_API_URL") or DEFAULT_API_URL)

    def endpoint_url(self, endpoint: str) -> str:
        return f"{self.api_url}/{endpoint}"
