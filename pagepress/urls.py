"""URL validation, canonicalization and reference resolution."""

from __future__ import annotations

from urllib.parse import urljoin, urlsplit, urlunsplit

from .errors import InvalidURL

ALLOWED_SCHEMES = ("http", "https")


def normalize_url(url: str) -> str:
    """Validate ``url`` and return its canonical absolute form.

    Only http and https URLs with a host are accepted. The scheme and host are
    lowercased, an empty path becomes ``/`` and surrounding whitespace is
    dropped. Anything else raises :class:`InvalidURL`.
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURL(str(url), "empty value")
    candidate = url.strip()
    try:
        parts = urlsplit(candidate)
        # Accessing port validates the netloc (raises on junk like ":abc").
        parts.port
    except ValueError as exc:
        raise InvalidURL(candidate, str(exc)) from exc

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidURL(candidate, f"unsupported scheme {parts.scheme or '(none)'!r}")
    if not parts.hostname:
        raise InvalidURL(candidate, "missing host")

    netloc = parts.netloc
    host_start = netloc.rfind("@") + 1
    netloc = netloc[:host_start] + netloc[host_start:].lower()
    path = parts.path or "/"
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def is_valid_url(url: str) -> bool:
    try:
        normalize_url(url)
    except InvalidURL:
        return False
    return True


def get_domain(url: str) -> str:
    """Return the hostname of ``url`` or an empty string."""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def origin(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def has_scheme(ref: str) -> bool:
    try:
        scheme = urlsplit(ref).scheme
    except ValueError:
        return False
    # A single letter is a Windows drive, not a scheme.
    return len(scheme) > 1


def absolutize(ref: str, base_url: str) -> str:
    """Turn a resource reference into an absolute URL.

    Rules, in order: protocol-relative references get the base scheme,
    root-relative references get the base origin, already absolute references
    are returned unchanged and anything else is resolved against the origin.
    References that fail to parse are returned as-is.
    """
    ref = ref.strip()
    try:
        base = urlsplit(base_url)
        if ref.startswith("//"):
            return f"{base.scheme or 'https'}:{ref}"
        if ref.startswith("/"):
            return f"{base.scheme}://{base.netloc}{ref}"
        if has_scheme(ref):
            return ref
        return urljoin(f"{base.scheme}://{base.netloc}/", ref)
    except ValueError:
        return ref
