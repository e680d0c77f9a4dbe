"""Web server and language runtime checkers."""

import re

from sanca.models.finding import Finding
from sanca.models.reqres import ProbeResponse
from sanca.models.technology import Technology

from .base import HttpChecker

HEADER_TEMPLATE = (
    '$techno_name$$techno_version$ has been identified using the HTTP header '
    '"{header}: $evidence$" returned at the following URL: $url_of_finding$'
)
SIGNATURE_TEMPLATE = (
    '$techno_name$$techno_version$ has been identified by looking at its signature '
    '"$evidence$" at this page: $url_of_finding$'
)


class ServerChecker(HttpChecker):
    """Look for a server signature in headers first, then in the page body.

    The first response yielding a match wins.
    """

    main_responses_only = True
    header_pattern: str
    body_pattern: str
    header_window = (45, 45)
    body_window = (45, 45)
    body_template = SIGNATURE_TEMPLATE

    def __init__(self):
        self.header_regex = re.compile(self.header_pattern)
        self.body_regex = re.compile(self.body_pattern)

    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        for response in self.candidates(responses):
            finding = self.match_headers(
                response, self.header_regex, *self.header_window, HEADER_TEMPLATE
            )
            if finding is None:
                finding = self.match_body(
                    response, self.body_regex, *self.body_window, self.body_template
                )
            if finding is not None:
                return [finding]
        return []


class ApacheHttpdChecker(ServerChecker):
    technology = Technology.HTTPD
    header_pattern = r"^(?P<wholematch>.*Apache(/(?P<version>\d+(\.\d+(\.\d+)?)?))?.*)"
    body_pattern = (
        r"<address>(?P<wholematch>Apache((/(?P<version>\d+\.\d+\.\d+)( \([^)]+\)))? "
        r"Server at (<a href=.[a-zA-Z0-9.@:+_-]*.>)?[a-zA-Z0-9-.]+(</a>)? Port \d+)?)</address>"
    )


class NginxChecker(ServerChecker):
    technology = Technology.NGINX
    header_pattern = r"^(?P<wholematch>nginx(/(?P<version>\d+(\.\d+(\.\d+)?)?))?)"
    body_pattern = (
        r"<hr><center>(?P<wholematch>nginx(/(?P<version>\d+\.\d+\.\d+)( \([^)]+\)))?)</center>"
    )
    body_window = (10, 15)


class PHPChecker(ServerChecker):
    technology = Technology.PHP
    header_pattern = r"(?P<wholematch>.*PHP/(?P<version>\d+\.\d+(\.\d+(\.\d+)?)?).*)"
    body_pattern = (
        r'(?P<wholematch><h1 class="p">PHP Version (?P<version>\d+\.\d+\.\d+(-[a-z0-9._-]+)?)</h1>)'
    )
    body_window = (30, 30)
    body_template = (
        "$techno_name$$techno_version$ has been identified by looking at the phpinfo()'s "
        'output "$evidence$" at this page: $url_of_finding$'
    )
