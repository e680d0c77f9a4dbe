"""Concurrent HTTP(S) reader used to fingerprint web assets."""

import asyncio
import logging
import re
from collections.abc import Iterable

import httpx

from sanca.errors import UrlParseError
from sanca.models.reqres import ProbeRequest, ProbeResponse, RequestKind, resolve_path

logger = logging.getLogger(__name__)

ACCEPT = "text/html"

SCRIPT_PATTERN = re.compile(
    r"""<script[^>]+src\s*=\s*["']?\s*(?P<url>(((?P<protocol>[a-z0-9]+):)?//"""
    r"""(?P<hostname>[^/:]+)(:(?P<port>\d{1,5}))?)?"""
    r"""(?P<path>/?[a-zA-Z0-9/._ %@-]*(?P<extension>\.[a-zA-Z0-9_-]+)?)?"""
    r"""(?P<querystring>\?[^#\s'">]*)?(#[^'">\s]*)?)\s*["']?"""
)

# Sfjs.loadToolbar('c32ea2')
SYMFONY_TOOLBAR_PATTERN = re.compile(
    r"""<script[^>]*>.*Sfjs.loadToolbar\(['"](?P<profilertoken>[a-f0-9]+)['"]\)"""
)
# Symfony 3.x and older: Sfjs.load('sfwdte16009', '\/app_dev.php\/_wdt\/e16009',
SYMFONY_LEGACY_TOOLBAR_PATTERN = re.compile(
    r"""Sfjs\.load\(\s*['"]sfwdt(?P<profilertoken>[a-f0-9]+)['"]"""
)


def normalize_header_name(name: str) -> str:
    """Keep only the first character of a header name uppercase."""
    name = name.lower()
    return name[:1].upper() + name[1:]


def normalize_headers(items: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Normalize header names, joining repeated headers with ``", "``."""
    headers: dict[str, str] = {}
    for name, value in items:
        key = normalize_header_name(name)
        if key in headers:
            headers[key] = f"{headers[key]}, {value}"
        else:
            headers[key] = value
    return headers


def extract_script_urls(request_url: str, body: str) -> list[str]:
    """Return the URLs of the scripts a page links to, in document order."""
    urls = []
    for match in SCRIPT_PATTERN.finditer(body):
        url = (match["url"] or "").strip()
        if not url:
            continue
        if match["protocol"] is None and match["hostname"] is not None:
            scheme = "http:" if request_url.startswith("http://") else "https:"
            url = scheme + url
        if url.startswith(("http://", "https://")):
            urls.append(url)
            continue
        try:
            urls.append(resolve_path(request_url, url))
        except UrlParseError:
            logger.warning("Skipping script %r linked from %s", url, request_url)
    return urls


def extract_symfony_profiler(request_url: str, body: str) -> str | None:
    """Return the profiler config URL when the Symfony debug toolbar is present."""
    match = SYMFONY_TOOLBAR_PATTERN.search(body)
    base_url = request_url
    if match is None:
        match = SYMFONY_LEGACY_TOOLBAR_PATTERN.search(body)
        # Legacy toolbars live under a front controller such as /app_dev.php.
        base_url = request_url.split("#", 1)[0].split("?", 1)[0] + "/"
    if match is None:
        return None
    try:
        return resolve_path(base_url, f"_profiler/{match['profilertoken']}?panel=config")
    except UrlParseError:
        logger.warning("Unable to build the Symfony profiler URL from %s", request_url)
        return None


class HttpReader:
    """Fetch probe requests concurrently over HTTP(S).

    Certificate validation is disabled: scanned assets routinely serve
    self-signed certificates.
    """

    def __init__(self, user_agent: str = "Sanca", timeout: float = 30.0):
        self.user_agent = user_agent
        self.timeout = timeout
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            verify=False,
            headers={"User-Agent": self.user_agent, "Accept": ACCEPT},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()

    async def fetch(self, requests: list[ProbeRequest]) -> list[ProbeResponse]:
        """
        Fetch every request concurrently.

        Failed requests contribute no response. The output follows the input
        order, each main response being followed by the responses it led to.
        Responses for an already collected URL are dropped.
        """
        if not self.client:
            raise RuntimeError("Client not initialized. Use async context manager.")

        batches = await asyncio.gather(*(self._read_page(request) for request in requests))
        responses: list[ProbeResponse] = []
        for batch in batches:
            for response in batch:
                if response not in responses:
                    responses.append(response)
        logger.info("Collected %d HTTP response(s) for %d request(s)", len(responses), len(requests))
        return responses

    async def _read_page(self, request: ProbeRequest) -> list[ProbeResponse]:
        main = await self._get(request.url, RequestKind.MAIN)
        if main is None:
            return []

        follow_ups: list[tuple[str, RequestKind]] = []
        if request.fetch_linked_scripts:
            scripts = extract_script_urls(request.url, main.body)
            logger.debug("Scripts linked from %s: %s", request.url, scripts)
            follow_ups.extend((url, RequestKind.LINKED_SCRIPT) for url in scripts)

        profiler_url = extract_symfony_profiler(request.url, main.body)
        if profiler_url:
            logger.info("Symfony debug toolbar found on %s", request.url)
            follow_ups.append((profiler_url, RequestKind.MAIN))

        results = await asyncio.gather(*(self._get(url, kind) for url, kind in follow_ups))
        return [main, *(response for response in results if response is not None)]

    async def _get(self, url: str, kind: RequestKind) -> ProbeResponse | None:
        try:
            response = await self.client.get(url)
        except (httpx.HTTPError, OSError) as exc:
            logger.warning("HTTP request to %s failed: %r", url, exc)
            return None
        except (httpx.InvalidURL, UnicodeError) as exc:
            logger.warning("Skipping invalid URL %r: %s", url, exc)
            return None

        try:
            body = response.text
        except (UnicodeDecodeError, LookupError):
            body = ""

        return ProbeResponse(
            url=str(response.url),
            headers=normalize_headers(response.headers.multi_items()),
            body=body,
            kind=kind,
            status_code=response.status_code,
        )
