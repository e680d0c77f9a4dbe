"""Tests for turning pattern matches into findings."""

import re

from sanca.models.reqres import ProbeResponse
from sanca.models.technology import Technology
from sanca.modules.checkers import extract_finding, extract_version

NGINX_PATTERN = re.compile(r"(?P<wholematch>nginx/(?P<version>\d+\.\d+\.\d+))")


class TestExtractVersion:
    """Test version reconstruction from named groups."""

    def test_version_group(self):
        assert extract_version(NGINX_PATTERN.search("nginx/1.22.0")) == "1.22.0"

    def test_numbered_parts_are_joined(self):
        match = re.search(r"(?P<version1>\d+)_(?P<version2>\d+)", "python 3_14")

        assert extract_version(match) == "3.14"

    def test_no_version(self):
        assert extract_version(re.search(r"nginx", "nginx")) is None


class TestExtractFinding:
    """Test the evidence window and template substitution."""

    def test_window_around_whole_match(self):
        match = NGINX_PATTERN.search("Server: nginx/1.22.0 (Ubuntu)")

        finding = extract_finding(match, Technology.NGINX, 3, 4, "$evidence$")

        assert finding.evidence == "r: nginx/1.22.0 (Ub"
        assert finding.version == "1.22.0"

    def test_window_is_clamped(self):
        match = NGINX_PATTERN.search("xx nginx/1.22.0 y")

        finding = extract_finding(match, Technology.NGINX, 100, 100, "$evidence$")

        assert finding.evidence == "xx nginx/1.22.0 y"

    def test_window_counts_characters(self):
        match = NGINX_PATTERN.search("ééé nginx/1.0.0 ééé")

        finding = extract_finding(match, Technology.NGINX, 2, 2, "$evidence$")

        assert finding.evidence == "é nginx/1.0.0 é"

    def test_pattern_without_wholematch_group(self):
        match = re.search(r"Exim (?P<version>\d+\.\d+)", "220 mx ESMTP Exim 4.96 ready")

        finding = extract_finding(match, Technology.EXIM, 0, 0, "$evidence$")

        assert finding.evidence == "Exim 4.96"

    def test_template_placeholders(self):
        response = ProbeResponse("https://example.com/")
        match = NGINX_PATTERN.search("nginx/1.22.0")

        finding = extract_finding(
            match,
            Technology.NGINX,
            0,
            0,
            "$techno_name$$techno_version$ found in $evidence$ at $url_of_finding$",
            response,
        )

        assert finding.evidence_text == "Nginx 1.22.0 found in nginx/1.22.0 at https://example.com/"
        assert finding.url_of_finding == "https://example.com/"
        assert finding.vulnerabilities == []

    def test_missing_version_renders_nothing(self):
        match = re.search(r"(?P<wholematch>Dovecot)", "+OK Dovecot ready.")

        finding = extract_finding(match, Technology.DOVECOT, 0, 0, "$techno_name$$techno_version$ seen")

        assert finding.version is None
        assert finding.evidence_text == f"{Technology.DOVECOT.display_name} seen"
        assert finding.url_of_finding is None

    def test_source_overrides_searched_text(self):
        source = "prefix nginx/1.22.0 suffix"
        match = NGINX_PATTERN.search(source)

        finding = extract_finding(match, Technology.NGINX, 7, 7, "$evidence$", source=source)

        assert finding.evidence == source
