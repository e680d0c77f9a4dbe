"""Operating system detection from SSH banners and HTTP server signatures."""

import logging
import re

from sanca.models.finding import Finding
from sanca.models.reqres import ProbeResponse
from sanca.models.technology import Technology

from .base import HttpChecker, TcpChecker, extract_finding

logger = logging.getLogger(__name__)

OS_NAMES = {
    "ubuntu": Technology.UBUNTU,
    "debian": Technology.DEBIAN,
    "centos": Technology.CENTOS,
    "fedora": Technology.FEDORA,
    "unix": Technology.UNIX,
    "oraclelinux": Technology.ORACLE_LINUX,
    "freebsd": Technology.FREEBSD,
    "openbsd": Technology.OPENBSD,
    "netbsd": Technology.NETBSD,
    "almalinux": Technology.ALMA_LINUX,
}

SERVER_OS_PATTERN = (
    r"\((?P<wholematch>(?P<os>Ubuntu|Debian|CentOS|Fedora|Unix|Oracle ?Linux"
    r"|FreeBSD|OpenBSD|NetBSD|AlmaLinux))\)"
)


def os_technology(name: str) -> Technology:
    """Map an OS name found in a banner to its technology, or the generic OS."""
    return OS_NAMES.get(name.replace(" ", "").lower(), Technology.OS)


class OSBannerChecker(TcpChecker):
    """Report the OS that OpenSSH advertises after its version."""

    technology = Technology.OS

    def __init__(self):
        self.regex = re.compile(
            r"^SSH-\d+\.\d+-OpenSSH_\d+\.\d+([a-z]\d+)? (?P<wholematch>(?P<os>[a-zA-Z0-9]+))"
        )

    def check(self, lines: list[str]) -> Finding | None:
        for line in lines:
            match = self.regex.search(line)
            if match:
                return extract_finding(
                    match,
                    os_technology(match["os"]),
                    0,
                    0,
                    "The operating system $evidence$ has been identified using the banner "
                    "presented by OpenSSH.",
                )
        return None


class OSHeaderChecker(HttpChecker):
    """Report the OS that web servers add to their ``Server`` header."""

    technology = Technology.OS
    main_responses_only = True

    def __init__(self):
        self.regex = re.compile(SERVER_OS_PATTERN, re.IGNORECASE)

    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        for response in self.candidates(responses):
            server = response.headers.get("Server")
            if not server:
                continue
            match = self.regex.search(server)
            if match:
                logger.info("OS signature found in the Server header of %s", response.url)
                return [
                    extract_finding(
                        match,
                        os_technology(match["os"]),
                        80,
                        80,
                        'The operating system $techno_name$ has been identified using the HTTP '
                        'header "Server: $evidence$" returned at the following URL: '
                        "$url_of_finding$",
                        response,
                    )
                ]
        return []
