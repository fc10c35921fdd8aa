"""
Request - minimal view of the incoming HTTP request.

Routing and request parsing live in the host; quire only needs the path,
the canonical URL and query parameters.
"""

from typing import Dict, List, Optional
from urllib.parse import parse_qs, urlsplit, urlunsplit


class Request:
    """
    Incoming request.

    Args:
        url: Absolute request URL (scheme, host, path and query)
        method: HTTP method

    Example:
        request = Request("https://example.com/about?ref=nav")
        request.path()          # "/about"
        request.url()           # "https://example.com/about"
        request.query("ref")    # "nav"
    """

    __slots__ = ("_parts", "method", "_query")

    def __init__(self, url: str, method: str = "GET"):
        self._parts = urlsplit(url)
        self.method = method.upper()
        self._query: Dict[str, List[str]] = parse_qs(self._parts.query, keep_blank_values=True)

    def path(self) -> str:
        return self._parts.path or "/"

    def url(self) -> str:
        """Absolute URL without query string or fragment."""
        return urlunsplit((self._parts.scheme, self._parts.netloc, self.path(), "", ""))

    def full_url(self) -> str:
        return urlunsplit(self._parts)

    def query(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """First value of a query parameter."""
        values = self._query.get(name)
        return values[0] if values else default

    def query_params(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._query.items()}

    def __repr__(self) -> str:
        return f"Request({self.method} {self.full_url()})"
