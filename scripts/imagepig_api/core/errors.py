"""Error types raised by the ImagePig client."""

from __future__ import annotations


class ImagePigError(Exception):
    """Base class for every failure surfaced by the client."""


class HttpError(ImagePigError):
    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"HTTP request failed: {cause}")
        self.cause = cause


class InvalidUrl(ImagePigError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL: {url}")
        self.url = url


class InvalidInput(ImagePigError):
    def __init__(self, message: str = "Cannot decode image input from base64") -> None:
        super().__init__(message)


class UnexpectedResponse(ImagePigError):
    def __init__(self, message: str = "Unexpected response") -> None:
        super().__init__(message)


class MissingData(ImagePigError):
    def __init__(self, message: str = "Unable to fetch image") -> None:
        super().__init__(message)
