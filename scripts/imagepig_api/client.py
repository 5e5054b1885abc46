"""ImagePig API client."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Union

import requests

from imagepig_api.core import params as build
from imagepig_api.core.contracts import (
    DEFAULT_DOWNLOAD_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    ClientConfig,
    Proportion,
    UpscalingFactor,
)
from imagepig_api.core.errors import HttpError, UnexpectedResponse
from imagepig_api.core.params import ImageArg
from imagepig_api.core.response import APIResponse

logger = logging.getLogger(__name__)

ExtraParams = Optional[Mapping[str, Any]]


def _encode_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_payload(payload: Mapping[str, Any]) -> str:
    """Serialize request parameters; raw bytes travel as arrays of byte values."""
    return json.dumps(dict(payload), default=_encode_value)


class ImagePig:
    """Synchronous client for the ImagePig API.

    Holds only read-only configuration. Each call opens its own ``requests``
    session unless one is injected, so one instance can serve many callers.
    """

    def __init__(
        self,
        api_key: str,
        api_url: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
    ) -> None:
        self.config = ClientConfig(
            api_key=api_key,
            api_url=api_url or "",
            request_timeout=request_timeout,
            download_timeout=download_timeout,
        )
        self._session = session

    @classmethod
    def from_env(cls, *, session: Optional[requests.Session] = None) -> "ImagePig":
        config = ClientConfig.from_env()
        return cls(config.api_key, config.api_url, session=session)

    def __repr__(self) -> str:
        return f"ImagePig(api_url={self.config.api_url!r})"

    def _post(self, session: Any, url: str, headers: Mapping[str, str], body: str) -> Any:
        try:
            return session.post(
                url,
                headers=headers,
                data=body,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as exc:
            raise HttpError(exc) from exc

    def call_api(self, endpoint: str, payload: Mapping[str, Any]) -> APIResponse:
        url = self.config.endpoint_url(endpoint)
        headers = {
            "Api-Key": self.config.api_key,
            "Content-Type": "application/json",
        }
        body = encode_payload(payload)
        logger.debug("POST %s (%d parameters)", url, len(payload))
        if self._session is not None:
            response = self._post(self._session, url, headers, body)
        else:
            # A fresh session per call keeps cookies and connections private to it.
            with requests.Session() as session:
                response = self._post(session, url, headers, body)

        logger.debug("POST %s returned %s", url, response.status_code)
        # Error statuses are not rejected here; their JSON body is handed back as is.
        try:
            content = response.json()
        except ValueError as exc:
            raise UnexpectedResponse(
                f"Response from {url} is not JSON (status {response.status_code})"
            ) from exc
        return APIResponse(
            content,
            response.status_code,
            session=self._session,
            download_timeout=self.config.download_timeout,
        )

    def default(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api("", build.text_params(prompt, negative_prompt, extra_params))

    def xl(
        self,
        prompt: str,
        negative_prompt: Optional[str] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api("xl", build.text_params(prompt, negative_prompt, extra_params))

    def flux(
        self,
        prompt: str,
        proportion: Optional[Union[Proportion, str]] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api("flux", build.flux_params(prompt, proportion, extra_params))

    def faceswap(
        self,
        source_image: ImageArg,
        target_image: ImageArg,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api("faceswap", build.faceswap_params(source_image, target_image, extra_params))

    def upscale(
        self,
        image: ImageArg,
        factor: Optional[Union[UpscalingFactor, int]] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api("upscale", build.upscale_params(image, factor, extra_params))

    def cutout(self, image: ImageArg, extra_params: ExtraParams = None) -> APIResponse:
        return self.call_api("cutout", build.cutout_params(image, extra_params))

    def replace(
        self,
        image: ImageArg,
        select_prompt: str,
        positive_prompt: str,
        negative_prompt: Optional[str] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api(
            "replace",
            build.replace_params(image, select_prompt, positive_prompt, negative_prompt, extra_params),
        )

    def outpaint(
        self,
        image: ImageArg,
        positive_prompt: str,
        negative_prompt: Optional[str] = None,
        top: Optional[int] = None,
        right: Optional[int] = None,
        bottom: Optional[int] = None,
        left: Optional[int] = None,
        extra_params: ExtraParams = None,
    ) -> APIResponse:
        return self.call_api(
            "outpaint",
            build.outpaint_params(
                image,
                positive_prompt,
                negative_prompt,
                top=top,
                right=right,
                bottom=bottom,
                left=left,
                extra_params=extra_params,
            ),
        )
