"""Exception hierarchy raised by the extraction pipeline."""

from __future__ import annotations

from typing import Optional


class ExtractionError(Exception):
    """Base class for every failure the pipeline reports to callers."""

    stage: str = "extract"

    def __init__(self, message: str, stage: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class InvalidURL(ExtractionError, ValueError):
    """The input is not a parseable http(s) URL."""

    stage = "url"

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class InsufficientContent(ExtractionError):
    """No candidate region reached the minimum text threshold."""

    def __init__(self, length: int, threshold: int) -> None:
        super().__init__(
            f"Main content has {length} characters, below the "
            f"{threshold}-character threshold; the page is likely not an article"
        )
        self.length = length
        self.threshold = threshold


class ExtractionFailed(ExtractionError):
    """Internal parse or scoring failure."""

    def __init__(self, reason: str, stage: str = "extract") -> None:
        super().__init__(f"Content extraction failed: {reason}", stage=stage)
        self.reason = reason


class Timeout(ExtractionError):
    """The end-to-end fetch and extract budget was exceeded."""

    stage = "fetch+extract"

    def __init__(self, seconds: float, message: Optional[str] = None) -> None:
        ExtractionError.__init__(
            self, message or f"Request exceeded the {seconds:g}s time budget"
        )
        self.seconds = seconds


class FetchError(ExtractionError):
    """The fetch collaborator could not produce the page."""

    stage = "fetch"
    user_message = "Failed to fetch content from the provided URL."

    def __init__(self, url: str, reason: str) -> None:
        ExtractionError.__init__(self, f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class DNSFailure(FetchError):
    user_message = "Could not resolve the domain name. Please check the URL and try again."


class ConnectionRefused(FetchError):
    user_message = (
        "Could not connect to the website. The server may be down or blocking requests."
    )


class FetchTimeout(FetchError, Timeout):
    user_message = "The webpage took too long to load."

    def __init__(self, url: str, seconds: float) -> None:
        FetchError.__init__(self, url, f"navigation timed out after {seconds:g}s")
        self.seconds = seconds


class HTTPStatus(FetchError):
    """The server answered with an error status code."""

    def __init__(self, url: str, code: int) -> None:
        super().__init__(url, f"HTTP status {code}")
        self.code = code

    @property
    def user_message(self) -> str:  # type: ignore[override]
        if self.code == 403:
            return "Access to this website is forbidden. The site may be blocking automated requests."
        if self.code == 404:
            return "The requested page was not found (404 error)."
        return f"The website answered with HTTP status {self.code}."


class InvalidOptions(ValueError):
    """Rendering options are out of their documented ranges."""

    def __init__(self, errors: list) -> None:
        super().__init__("; ".join(errors))
        self.errors = list(errors)
