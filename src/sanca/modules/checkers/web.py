"""CMS, framework and JavaScript library checkers."""

import re

from sanca.models.finding import Finding
from sanca.models.reqres import ProbeResponse, RequestKind
from sanca.models.technology import Technology

from .base import HttpChecker

FOUND_TEMPLATE = (
    '$techno_name$$techno_version$ has been identified because we found "$evidence$" '
    "at this url: $url_of_finding$"
)


class WordPressChecker(HttpChecker):
    """Generator meta tag on any page, asset version on the login page."""

    technology = Technology.WORDPRESS

    def __init__(self):
        self.meta_regex = re.compile(
            r"""(?P<wholematch><meta\s+name\s*=\s*['"]generator['"]\s+content\s*=\s*"""
            r"""['"]WordPress (?P<version>\d+\.\d+\.\d+)['"]\s*/>)"""
        )
        self.login_regex = re.compile(r"(?P<wholematch>\?ver=(?P<version>\d+\.\d+\.\d+))")

    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        for response in responses:
            if response.kind is not RequestKind.MAIN or response.status_code != 200:
                continue
            finding = self.match_body(response, self.meta_regex, 30, 30, FOUND_TEMPLATE)
            if finding is None and "/wp-login.php" in response.url:
                finding = self.match_body(response, self.login_regex, 30, 30, FOUND_TEMPLATE)
            if finding is not None:
                return [finding]
        return []


class SymfonyChecker(HttpChecker):
    """Read the version from the profiler configuration panel."""

    technology = Technology.SYMFONY
    main_responses_only = True

    def __init__(self):
        self.regex = re.compile(
            r"""<h2>Symfony Configuration</h2>.+(?P<wholematch><span\s+class\s*=\s*['"]value['"]>"""
            r"""(?P<version>\d+\.\d+\.\d+)</span>).+<span class="label">Symfony version</span>""",
            re.DOTALL,
        )

    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        for response in self.candidates(responses):
            if "/_profiler/" not in response.url:
                continue
            finding = self.match_body(
                response,
                self.regex,
                50,
                50,
                "$techno_name$$techno_version$ has been identified because the debug mode was "
                'enabled and we found "$evidence$" at this url: $url_of_finding$',
            )
            if finding is not None:
                return [finding]
        return []


class JQueryChecker(HttpChecker):
    """Banner comment of the jQuery distribution files."""

    technology = Technology.JQUERY

    def __init__(self):
        self.regex = re.compile(
            r"/\*![\s*]+(?P<wholematch>jQuery (JavaScript Library )?(v(?P<version>\d\.\d\.\d)))"
        )

    def check(self, responses: list[ProbeResponse]) -> list[Finding]:
        findings = []
        for response in responses:
            finding = self.match_body(response, self.regex, 30, 30, FOUND_TEMPLATE)
            if finding is not None:
                findings.append(finding)
        return findings
