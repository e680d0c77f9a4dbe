"""Probe requests and responses exchanged between the planner, readers and checkers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from sanca.errors import UrlParseError

if TYPE_CHECKING:
    from .technology import Technology

logger = logging.getLogger(__name__)

# Not exhaustive: no user:pass@host form, and the fragment is ignored.
URL_PATTERN = re.compile(
    r"(?P<protocol>[a-z0-9]+)://(?P<hostname>[^/:]+)(:(?P<port>\d{1,5}))?"
    r"(?P<path>/[^?#]*)?(?P<querystring>\?[^#]*)?(#.*)?"
)

DEFAULT_PORTS = {"http": 80, "https": 443}


class RequestKind(Enum):
    """Whether a response answers a planned request or a discovered script."""

    MAIN = "main"
    LINKED_SCRIPT = "linked_script"


@dataclass(frozen=True)
class ProbeRequest:
    """A URL to fetch, and whether to follow the scripts it links to."""

    url: str
    fetch_linked_scripts: bool = False

    @classmethod
    def from_path(
        cls, base_url: str, fragment: str, fetch_linked_scripts: bool = False
    ) -> ProbeRequest:
        """Build a request for ``fragment`` resolved against ``base_url``."""
        return cls(resolve_path(base_url, fragment), fetch_linked_scripts)


@dataclass
class ProbeResponse:
    """An HTTP response handed to the checkers.

    Header names are normalized so that only their first character is
    uppercase (``Server``, ``X-powered-by``).
    """

    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
    kind: RequestKind = RequestKind.MAIN
    status_code: int = 200

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProbeResponse):
            return NotImplemented
        return self.url == other.url

    def __hash__(self) -> int:
        return hash(self.url)

    def get_headers(self, names: Iterable[str]) -> dict[str, str]:
        """Return the subset of headers present in this response."""
        return {name: self.headers[name] for name in names if name in self.headers}


def _parse_url(url: str) -> re.Match[str]:
    match = URL_PATTERN.match(url)
    if match is None:
        raise UrlParseError(url)
    return match


def resolve_path(base_url: str, fragment: str) -> str:
    """Resolve a path fragment against a base URL.

    An absolute fragment replaces the whole path and drops the query string.
    A relative fragment is appended to a base path ending with ``/``,
    otherwise it replaces the last segment of the base path. A relative
    fragment keeps the base query string unless it carries its own.

    >>> resolve_path("https://example.com/blog/index.php", "/phpinfo.php")
    'https://example.com/phpinfo.php'
    >>> resolve_path("https://example.com/blog/index.php", "phpinfo.php")
    'https://example.com/blog/phpinfo.php'
    """
    match = _parse_url(base_url)
    port = f":{match['port']}" if match["port"] else ""
    base_path = match["path"] or "/"
    query = match["querystring"] or ""

    if fragment.startswith("/") or "?" in fragment:
        query = ""
    if fragment.startswith("/"):
        new_path = fragment
    elif base_path.endswith("/"):
        new_path = base_path + fragment
    else:
        segments = [segment for segment in base_path.split("/") if segment]
        new_path = "/" + "/".join([*segments[:-1], fragment])

    return f"{match['protocol']}://{match['hostname']}{port}{new_path}{query}"


def hostname_port(url: str) -> tuple[str, int]:
    """Return the host of a URL and its explicit or scheme-default port."""
    match = _parse_url(url)
    if match["port"]:
        return match["hostname"], int(match["port"])
    protocol = match["protocol"]
    if protocol not in DEFAULT_PORTS:
        raise UrlParseError(url)
    return match["hostname"], DEFAULT_PORTS[protocol]


def plan_requests(main_url: str, technologies: Iterable[Technology]) -> list[ProbeRequest]:
    """Merge the probe lists of several technologies.

    URLs are unique in the result. A URL fetches its linked scripts when at
    least one technology asked for it. The main URL, when planned, comes first.
    """
    planned: dict[str, bool] = {}
    for technology in technologies:
        for request in technology.url_requests(main_url):
            planned[request.url] = planned.get(request.url, False) or request.fetch_linked_scripts
    logger.debug("Planned %d probe request(s) for %s", len(planned), main_url)

    requests = [ProbeRequest(url, fetch) for url, fetch in planned.items() if url != main_url]
    if main_url in planned:
        requests.insert(0, ProbeRequest(main_url, planned[main_url]))
    return requests
