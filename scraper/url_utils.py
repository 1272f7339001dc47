import re
from typing import Optional
from urllib.parse import urljoin, urlparse, urlsplit, urlunsplit

import tldextract

HTTP_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}

# Any ASCII whitespace or control character left after trimming marks a malformed link
_WHITESPACE_OR_CONTROL = re.compile(r"[\x00-\x20\x7f]")
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):")

_SINGLE_DOT = (".", "%2e")
_DOUBLE_DOT = ("..", ".%2e", "%2e.", "%2e%2e")

# Bundled public suffix snapshot only; no network fetch at runtime
_extract = tldextract.TLDExtract(suffix_list_urls=())


def _clean(candidate) -> Optional[str]:
    if not isinstance(candidate, str):
        return None
    stripped = candidate.strip()
    if not stripped or _WHITESPACE_OR_CONTROL.search(stripped):
        return None
    return stripped


def _backslashes_to_slashes(candidate: str, base_scheme: str) -> str:
    """
    Browsers read "\\" as "/" in http(s) URLs before the query or fragment.
    Links with any other scheme are left as written.
    """
    match = _SCHEME.match(candidate)
    scheme = (match.group(1) if match else base_scheme).lower()
    if scheme not in HTTP_SCHEMES:
        return candidate
    cut = len(candidate)
    for marker in ("?", "#"):
        idx = candidate.find(marker)
        if idx != -1:
            cut = min(cut, idx)
    return candidate[:cut].replace("\\", "/") + candidate[cut:]


def remove_dot_segments(path: str) -> str:
    """
    /x/../a -> /a, /a/./b/ -> /a/b/, /.. -> /
    Percent-encoded dots count as dots, as in browsers.
    """
    segments = path.split("/")
    output = []
    for segment in segments:
        lowered = segment.lower()
        if lowered in _DOUBLE_DOT:
            if len(output) > 1:
                output.pop()
        elif lowered not in _SINGLE_DOT:
            output.append(segment)
    if segments[-1].lower() in _SINGLE_DOT + _DOUBLE_DOT:
        output.append("")
    return "/".join(output)


def _canonical(parts) -> Optional[str]:
    """
    Serialises a split URL the way a browser would:
    - scheme and host lowercased (userinfo untouched)
    - default port (:80, :443) and an empty port dropped
    - dot segments removed, empty http/https path becomes "/"
    Returns None when the URL is not absolute.
    """
    scheme = parts.scheme.lower()
    if not scheme:
        return None

    path = parts.path
    netloc = parts.netloc
    if scheme in HTTP_SCHEMES:
        if not parts.hostname:
            return None
        path = remove_dot_segments(path) or "/"

        userinfo, sep, hostport = netloc.rpartition("@")
        port = parts.port
        host = hostport
        if port is not None or hostport.endswith(":"):
            host = hostport.rsplit(":", 1)[0]
        netloc = f"{userinfo}{sep}{host.lower()}"
        if port is not None and port != DEFAULT_PORTS[scheme]:
            netloc = f"{netloc}:{port}"
    else:
        userinfo, sep, hostport = netloc.rpartition("@")
        netloc = f"{userinfo}{sep}{hostport.lower()}"

    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def safe_url(url) -> Optional[str]:
    """
    Canonical form of an absolute http/https URL with a host, or None.
    Used to validate the origin URL of an inbound request.
    """
    cleaned = _clean(url)
    if cleaned is None:
        return None
    cleaned = _backslashes_to_slashes(cleaned, "")
    try:
        parts = urlsplit(cleaned)
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return None
    if parts.scheme.lower() not in HTTP_SCHEMES:
        return None
    return _canonical(parts)


def resolve_url(candidate, base: str) -> Optional[str]:
    """
    Resolves a raw hyperlink string against base (scheme-relative, path-relative,
    dot segments, query and fragment). Returns None for malformed candidates.
    """
    cleaned = _clean(candidate)
    if cleaned is None:
        return None
    try:
        cleaned = _backslashes_to_slashes(cleaned, urlsplit(base).scheme)
        parts = urlsplit(urljoin(base, cleaned))
        parts.port
    except ValueError:
        return None
    return _canonical(parts)


def registrable_domain(url: str) -> str:
    """
    example.co.uk for https://www.blog.example.co.uk/x.
    Falls back to the bare hostname for IPs and hosts without a known suffix.
    """
    ext = _extract(url)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}".lower()
    return (urlparse(url).hostname or "").lower()


def same_site(url: str, origin: str) -> bool:
    return registrable_domain(url) == registrable_domain(origin)
