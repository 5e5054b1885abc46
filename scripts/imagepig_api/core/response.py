"""Response wrapper and image materialization."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import requests

from .contracts import DEFAULT_DOWNLOAD_TIMEOUT
from .errors import MissingData, UnexpectedResponse
from .utils import decode_base64, extension_from_mime, parse_timestamp

logger = logging.getLogger(__name__)

DOWNLOAD_ATTEMPTS = 10
DOWNLOAD_INTERRUPTION = 1.0
DOWNLOAD_HEADERS = {"User-Agent": "Mozilla/5.0"}


class DownloadOutcome(Enum):
    SUCCESS = "success"
    RETRY = "retry"
    FATAL = "fatal"


@dataclass
class DownloadAttempt:
    outcome: DownloadOutcome
    content: Optional[bytes] = None
    status_code: Optional[int] = None
    error: Optional[BaseException] = None


def classify_status(status_code: int, content: bytes = b"") -> DownloadAttempt:
    """Map one HTTP status to the next step of the download loop."""
    if 200 <= status_code < 300:
        return DownloadAttempt(DownloadOutcome.SUCCESS, content=content, status_code=status_code)
    if status_code == 404:
        return DownloadAttempt(DownloadOutcome.RETRY, status_code=status_code)
    return DownloadAttempt(DownloadOutcome.FATAL, status_code=status_code)


def fetch_once(session: Any, url: str, timeout: float = DEFAULT_DOWNLOAD_TIMEOUT) -> DownloadAttempt:
    try:
        response = session.get(url, headers=DOWNLOAD_HEADERS, timeout=timeout)
        return classify_status(response.status_code, response.content)
    except requests.RequestException as exc:
        # A transport failure ends the download; it is not retried like a 404.
        return DownloadAttempt(DownloadOutcome.FATAL, error=exc)


def download_image(
    url: str,
    *,
    session: Any = None,
    attempts: int = DOWNLOAD_ATTEMPTS,
    interval: float = DOWNLOAD_INTERRUPTION,
    sleep: Optional[Callable[[float], None]] = None,
    timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
) -> bytes:
    """Fetch ``url``, waiting out 404s while the stored object becomes visible.

    Returns the body of the first 2xx response. Raises ``MissingData`` when the
    attempts run out, on any other status and on the first transport error.
    """
    if session is None:
        with requests.Session() as own_session:
            return download_image(
                url,
                session=own_session,
                attempts=attempts,
                interval=interval,
                sleep=sleep,
                timeout=timeout,
            )
    if sleep is None:
        sleep = time.sleep

    for attempt_no in range(1, attempts + 1):
        attempt = fetch_once(session, url, timeout)
        logger.debug(
            "Download attempt %d/%d for %s: %s (status=%s)",
            attempt_no,
            attempts,
            url,
            attempt.outcome.value,
            attempt.status_code,
        )
        if attempt.outcome is DownloadOutcome.SUCCESS:
            return attempt.content or b""
        if attempt.outcome is DownloadOutcome.FATAL:
            if attempt.error is not None:
                raise MissingData(f"Unable to fetch image: {attempt.error}") from attempt.error
            raise MissingData(f"Unable to fetch image: HTTP {attempt.status_code}")
        if attempt_no < attempts:
            sleep(interval)
    raise MissingData(f"Unable to fetch image after {attempts} attempts")


class APIResponse:
    """Decoded body of one ImagePig call.

    Accessors never raise; they return ``None`` when a field is missing or has
    the wrong type. Only ``data()`` and ``save()`` can fail.
    """

    def __init__(
        self,
        content: Any,
        status_code: Optional[int] = None,
        *,
        session: Any = None,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
    ) -> None:
        self.content = content
        self.status_code = status_code
        self._session = session
        self._download_timeout = download_timeout

    def __repr__(self) -> str:
        return f"APIResponse(status_code={self.status_code!r}, url={self.url()!r})"

    def _get(self, key: str) -> Any:
        if isinstance(self.content, Mapping):
            return self.content.get(key)
        return None

    def _get_str(self, key: str) -> Optional[str]:
        value = self._get(key)
        return value if isinstance(value, str) else None

    def url(self) -> Optional[str]:
        return self._get_str("image_url")

    def seed(self) -> Optional[int]:
        value = self._get("seed")
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            return None
        return value

    def mime_type(self) -> Optional[str]:
        return self._get_str("mime_type")

    def duration(self) -> Optional[timedelta]:
        started = parse_timestamp(self._get("started_at"))
        completed = parse_timestamp(self._get("completed_at"))
        if started is None or completed is None:
            return None
        return completed - started

    def suggested_extension(self) -> str:
        return extension_from_mime(self.mime_type())

    def data(self) -> bytes:
        inline = self._get_str("image_data")
        if inline is not None:
            try:
                return decode_base64(inline)
            except ValueError as exc:
                raise UnexpectedResponse("image_data is not valid base64") from exc

        url = self.url()
        if url is None:
            raise MissingData()
        return download_image(url, session=self._session, timeout=self._download_timeout)

    def save(self, path: Union[str, Path]) -> Path:
        payload = self.data()
        target = Path(path)
        try:
            with target.open("wb") as handle:
                handle.write(payload)
        except OSError as exc:
            raise UnexpectedResponse(f"Unable to write {target}: {exc}") from exc
        return target
