"""Base contract for technology checkers.

Checkers come in two flavors: TCP checkers look at the banner a service
sends after the connection opens, HTTP checkers look at the responses
gathered for the planned probe requests. Both turn a pattern match into a
:class:`Finding` through :func:`extract_finding`.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable

from sanca.models.finding import Finding
from sanca.models.reqres import ProbeResponse, RequestKind
from sanca.models.technology import Technology

logger = logging.getLogger(__name__)

VERSION_PARTS = ("version1", "version2", "version3", "version4")


def extract_version(match: re.Match[str]) -> str | None:
    """Return the ``version`` group, or the ``version1``..``version4`` parts joined with dots."""
    groups = match.groupdict()
    if groups.get("version"):
        return groups["version"]
    parts = [groups[name] for name in VERSION_PARTS if groups.get(name)]
    return ".".join(parts) if parts else None


def extract_finding(
    match: re.Match[str],
    technology: Technology,
    keep_left: int,
    keep_right: int,
    template: str,
    response: ProbeResponse | None = None,
    source: str | None = None,
) -> Finding:
    """
    Turn a pattern match into a finding.

    The evidence is the ``wholematch`` group (or the whole match when the
    pattern has no such group) widened by up to ``keep_left`` characters before
    and ``keep_right`` characters after, within ``source`` (defaults to the
    searched text). The template placeholders ``$techno_name$``,
    ``$techno_version$``, ``$evidence$`` and ``$url_of_finding$`` are replaced.

    Args:
        match: A successful match.
        technology: Technology reported by the finding.
        keep_left: Characters kept before the whole match.
        keep_right: Characters kept after the whole match.
        template: Evidence sentence template.
        response: HTTP response the match comes from, if any.
        source: Text the match positions refer to.

    Returns:
        The finding, without vulnerabilities.
    """
    text = match.string if source is None else source
    group = "wholematch" if "wholematch" in match.groupdict() else 0
    start, end = match.span(group)
    if start < 0:
        start, end = match.span()
    evidence = text[max(0, start - keep_left) : min(len(text), end + keep_right)]

    version = extract_version(match)
    url = response.url if response is not None else None
    evidence_text = (
        template.replace("$techno_name$", technology.display_name)
        .replace("$techno_version$", f" {version}" if version else "")
        .replace("$evidence$", evidence)
        .replace("$url_of_finding$", url or "")
    )
    return Finding(
        technology=technology,
        version=version,
        evidence=evidence,
        evidence_text=evidence_text,
        url_of_finding=url,
    )


class TcpChecker(ABC):
    """Identify a technology from TCP banners."""

    technology: Technology

    @abstractmethod
    def check(self, lines: list[str]) -> Finding | None:
        """Return at most one finding for the given banners."""


class HttpChecker(ABC):
    """Identify a technology from HTTP responses."""

    technology: Technology

    # Server signatures only make sense on pages, not on linked scripts.
    main_responses_only = False

    @abstractmethod
    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        """Return the findings for the given responses."""

    def candidates(self, responses: Iterable[ProbeResponse]) -> list[ProbeResponse]:
        if not self.main_responses_only:
            return list(responses)
        return [response for response in responses if response.kind is RequestKind.MAIN]

    def match_headers(
        self,
        response: ProbeResponse,
        pattern: re.Pattern[str],
        keep_left: int,
        keep_right: int,
        template: str,
        names: Iterable[str] = ("Server", "X-powered-by"),
    ) -> Finding | None:
        """Search the given headers. ``{header}`` in the template is the header name."""
        for name, value in response.get_headers(names).items():
            match = pattern.search(value)
            if match:
                logger.info("%s matched header %s at %s", type(self).__name__, name, response.url)
                return extract_finding(
                    match,
                    self.technology,
                    keep_left,
                    keep_right,
                    template.replace("{header}", name),
                    response,
                )
        return None

    def match_body(
        self,
        response: ProbeResponse,
        pattern: re.Pattern[str],
        keep_left: int,
        keep_right: int,
        template: str,
    ) -> Finding | None:
        match = pattern.search(response.body)
        if match is None:
            return None
        logger.info("%s matched the body of %s", type(self).__name__, response.url)
        return extract_finding(match, self.technology, keep_left, keep_right, template, response)
