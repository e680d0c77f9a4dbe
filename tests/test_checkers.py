"""Tests for the built-in technology checkers and their registry."""

import pytest

from sanca.models.reqres import ProbeResponse, RequestKind
from sanca.models.technology import Technology
from sanca.modules.checkers import CheckerRegistry, create_default_registry
from sanca.modules.checkers.os import OSBannerChecker, OSHeaderChecker, os_technology
from sanca.modules.checkers.servers import ApacheHttpdChecker, NginxChecker, PHPChecker
from sanca.modules.checkers.services import (
    DovecotChecker,
    EximChecker,
    MySQLChecker,
    OpenSSHChecker,
    ProFTPDChecker,
)
from sanca.modules.checkers.web import JQueryChecker, SymfonyChecker, WordPressChecker

MAIN = "https://example.com/"

NGINX_404 = (
    "<html>\r\n<head><title>404 Not Found</title></head>\r\n<body>\r\n"
    "<center><h1>404 Not Found</h1></center>\r\n"
    "<hr><center>nginx/1.18.0 (Ubuntu)</center>\r\n</body>\r\n</html>\r\n"
)


def page(headers=None, body="", url=MAIN, kind=RequestKind.MAIN, status_code=200):
    return ProbeResponse(url, headers or {}, body, kind, status_code)


class TestServiceBanners:
    """Test checkers reading TCP banners."""

    def test_openssh(self):
        finding = OpenSSHChecker().check(["SSH-2.0-OpenSSH_8.2p1 Ubuntu-4ubuntu0.5\r\n"])

        assert finding.technology is Technology.OPENSSH
        assert finding.version == "8.2p1"
        assert finding.evidence.startswith("SSH-2.0-OpenSSH_8.2p1 Ubuntu")
        assert "after initiating a TCP connection" in finding.evidence_text

    def test_exim(self):
        finding = EximChecker().check(
            ["220 mail.example.com ESMTP Exim 4.94.2 Mon, 01 Jan 2024 10:00:00 +0000\r\n"]
        )

        assert finding.technology is Technology.EXIM
        assert finding.version == "4.94.2"

    def test_exim_two_part_version(self):
        finding = EximChecker().check(["220 mx.example.com ESMTP Exim 4.96 Tue, 02 Jan 2024\r\n"])

        assert finding.version == "4.96"

    def test_proftpd(self):
        finding = ProFTPDChecker().check(["220 ProFTPD 1.3.5e Server (Debian) [::ffff:10.0.0.1]\r\n"])

        assert finding.version == "1.3.5e"

    def test_mysql(self):
        banner = "J\x00\x00\x00\n5.7.33-0ubuntu0.18.04.1\x00\x08\x00\x00\x00abcdefgh\x00mysql_native_password\x00"

        finding = MySQLChecker().check([banner])

        assert finding.technology is Technology.MYSQL
        assert finding.version == "5.7.33"

    def test_mariadb_is_not_mysql(self):
        banner = "5.5.5-10.6.12-MariaDB-0ubuntu0.22.04.1\x00abcdefgh\x00mysql_native_password\x00"

        assert MySQLChecker().check([banner]) is None

    def test_dovecot_imap(self):
        banner = (
            "* OK [CAPABILITY IMAP4rev1 SASL-IR LOGIN-REFERRALS ID ENABLE IDLE LITERAL+ "
            "STARTTLS AUTH=PLAIN] Dovecot (Ubuntu) ready.\r\n"
        )

        finding = DovecotChecker().check([banner])

        assert finding.technology is Technology.DOVECOT
        assert finding.version is None

    def test_dovecot_pop3(self):
        assert DovecotChecker().check(["+OK Dovecot (Debian) ready.\r\n"]) is not None

    def test_no_match(self):
        assert OpenSSHChecker().check(["220 ProFTPD 1.3.5e Server (Debian)"]) is None
        assert OpenSSHChecker().check([]) is None

    def test_first_matching_banner_wins(self):
        finding = OpenSSHChecker().check(["garbage", "SSH-2.0-OpenSSH_9.6p1", "SSH-2.0-OpenSSH_7.4"])

        assert finding.version == "9.6p1"


class TestOperatingSystem:
    """Test OS detection from SSH banners and Server headers."""

    def test_ubuntu_from_ssh_banner(self):
        finding = OSBannerChecker().check(["SSH-2.0-OpenSSH_8.2p1 Ubuntu-4ubuntu0.5\r\n"])

        assert finding.technology is Technology.UBUNTU
        assert finding.evidence == "Ubuntu"

    def test_debian_from_ssh_banner(self):
        finding = OSBannerChecker().check(["SSH-2.0-OpenSSH_7.9p1 Debian-10+deb10u2\r\n"])

        assert finding.technology is Technology.DEBIAN

    def test_banner_without_os(self):
        assert OSBannerChecker().check(["SSH-2.0-OpenSSH_8.9\r\n"]) is None

    def test_unknown_os_name_is_generic(self):
        assert os_technology("Haiku") is Technology.OS
        assert os_technology("Oracle Linux") is Technology.ORACLE_LINUX

    def test_server_header(self):
        findings = OSHeaderChecker().check([page({"Server": "Apache/2.4.41 (Ubuntu)"})])

        assert [finding.technology for finding in findings] == [Technology.UBUNTU]
        assert findings[0].url_of_finding == MAIN

    def test_server_header_without_os(self):
        assert OSHeaderChecker().check([page({"Server": "nginx"})]) == []


class TestServers:
    """Test web server and runtime checkers."""

    def test_nginx_header(self, nginx_finding):
        findings = NginxChecker().check([page({"Server": "nginx/1.22.0"})])

        assert findings == [nginx_finding]
        assert findings[0].evidence_text == nginx_finding.evidence_text

    def test_nginx_header_without_version(self):
        findings = NginxChecker().check([page({"Server": "nginx"})])

        assert findings[0].version is None

    def test_nginx_error_page(self):
        findings = NginxChecker().check(
            [page(url="https://example.com/pageNotFoundNotFound", body=NGINX_404, status_code=404)]
        )

        assert findings[0].version == "1.18.0"
        assert "nginx/1.18.0 (Ubuntu)" in findings[0].evidence
        assert "by looking at its signature" in findings[0].evidence_text

    def test_linked_scripts_are_ignored(self):
        response = page({"Server": "nginx/1.22.0"}, kind=RequestKind.LINKED_SCRIPT)

        assert NginxChecker().check([response]) == []

    def test_first_response_wins(self):
        findings = NginxChecker().check(
            [
                page({"Server": "cloudflare"}),
                page({"Server": "nginx/1.24.0"}, url="https://example.com/a"),
                page({"Server": "nginx/1.18.0"}, url="https://example.com/b"),
            ]
        )

        assert [finding.version for finding in findings] == ["1.24.0"]

    def test_apache_header(self):
        findings = ApacheHttpdChecker().check([page({"Server": "Apache/2.4.41 (Ubuntu)"})])

        assert findings[0].technology is Technology.HTTPD
        assert findings[0].version == "2.4.41"

    def test_apache_error_page(self):
        body = "<hr>\n<address>Apache/2.4.52 (Ubuntu) Server at example.com Port 80</address>\n"

        findings = ApacheHttpdChecker().check([page(body=body)])

        assert findings[0].version == "2.4.52"

    def test_php_powered_by_header(self):
        findings = PHPChecker().check([page({"X-powered-by": "PHP/8.1.2-1ubuntu2.14"})])

        assert findings[0].version == "8.1.2"
        assert '"X-powered-by: PHP/8.1.2-1ubuntu2.14"' in findings[0].evidence_text

    def test_phpinfo_page(self):
        body = '<table><tr class="h"><td><h1 class="p">PHP Version 7.4.3</h1></td></tr></table>'

        findings = PHPChecker().check([page(body=body, url="https://example.com/phpinfo.php")])

        assert findings[0].version == "7.4.3"
        assert "phpinfo()" in findings[0].evidence_text

    def test_no_signature(self):
        assert PHPChecker().check([page({"Server": "nginx"}, body="<html></html>")]) == []


class TestWebApplications:
    """Test CMS, framework and library checkers."""

    def test_wordpress_generator_meta(self):
        body = '<head><meta name="generator" content="WordPress 6.4.2" /></head>'

        findings = WordPressChecker().check([page(body=body)])

        assert findings[0].technology is Technology.WORDPRESS
        assert findings[0].version == "6.4.2"

    def test_wordpress_requires_status_200(self):
        body = '<meta name="generator" content="WordPress 6.4.2" />'

        assert WordPressChecker().check([page(body=body, status_code=404)]) == []

    def test_wordpress_login_assets(self):
        body = "<link rel='stylesheet' href='https://example.com/wp-includes/css/dashicons.min.css?ver=6.4.2' />"

        login = WordPressChecker().check([page(body=body, url="https://example.com/wp-login.php")])
        other = WordPressChecker().check([page(body=body, url="https://example.com/about/")])

        assert login[0].version == "6.4.2"
        assert other == []

    def test_symfony_profiler(self):
        body = (
            "<h2>Symfony Configuration</h2>\n<div class=\"metrics\">\n<div class=\"metric\">\n"
            "<span class=\"value\">5.4.3</span>\n<span class=\"label\">Symfony version</span>\n</div>"
        )
        profiler = page(body=body, url="https://example.com/_profiler/c32ea2?panel=config")

        findings = SymfonyChecker().check([page(body=body), profiler])

        assert findings[0].version == "5.4.3"
        assert findings[0].url_of_finding == profiler.url
        assert "debug mode was enabled" in findings[0].evidence_text

    def test_jquery_every_matching_response(self):
        responses = [
            page(body="<html></html>"),
            page(
                body="/*! jQuery v3.6.0 | (c) OpenJS Foundation and other contributors */",
                url="https://example.com/js/jquery.min.js",
                kind=RequestKind.LINKED_SCRIPT,
            ),
            page(
                body="/*!\n * jQuery JavaScript Library v2.2.4\n * http://jquery.com/\n */",
                url="https://cdn.example.net/jquery.js",
                kind=RequestKind.LINKED_SCRIPT,
            ),
        ]

        findings = JQueryChecker().check(responses)

        assert [finding.version for finding in findings] == ["3.6.0", "2.2.4"]


class TestCheckerRegistry:
    """Test registration and lookup of checkers."""

    def test_rejects_non_checkers(self):
        with pytest.raises(TypeError):
            CheckerRegistry().register(object())

    def test_os_has_both_checkers(self):
        registry = create_default_registry()

        assert [type(c) for c in registry.tcp_checkers([Technology.OS])] == [OSBannerChecker]
        assert [type(c) for c in registry.http_checkers([Technology.OS])] == [OSHeaderChecker]

    def test_order_follows_requested_technologies(self):
        registry = create_default_registry()

        checkers = registry.tcp_checkers([Technology.MYSQL, Technology.OPENSSH, Technology.MYSQL])

        assert [type(c) for c in checkers] == [MySQLChecker, OpenSSHChecker]

    def test_technologies_without_checker_are_skipped(self):
        registry = create_default_registry()

        assert registry.http_checkers([Technology.OPENSSH, Technology.TOMCAT]) == []

    def test_technologies(self):
        technologies = create_default_registry().technologies()

        assert Technology.OS in technologies
        assert Technology.JQUERY in technologies
        assert Technology.TOMCAT not in technologies

    def test_register_replaces(self):
        registry = CheckerRegistry([NginxChecker()])
        replacement = NginxChecker()

        registry.register(replacement)

        assert registry.http_checkers([Technology.NGINX]) == [replacement]
