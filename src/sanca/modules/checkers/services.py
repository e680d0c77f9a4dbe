"""Checkers reading the banner of mail, FTP, SSH and database services."""

import logging
import re

from sanca.models.finding import Finding
from sanca.models.technology import Technology

from .base import TcpChecker, extract_finding

logger = logging.getLogger(__name__)

BANNER_TEMPLATE = (
    "$techno_name$$techno_version$ has been identified using the banner it presents "
    "after initiating a TCP connection: $evidence$"
)


class BannerChecker(TcpChecker):
    """Match one pattern against each banner and report the first hit."""

    pattern: str
    template: str = BANNER_TEMPLATE
    keep_left = 0
    keep_right = 200

    def __init__(self):
        self.regex = re.compile(self.pattern)

    def accepts(self, line: str) -> bool:
        return True

    def check(self, lines: list[str]) -> Finding | None:
        for line in lines:
            if not self.accepts(line):
                continue
            match = self.regex.search(line)
            if match:
                logger.info("%s banner matched", self.technology.display_name)
                return extract_finding(
                    match, self.technology, self.keep_left, self.keep_right, self.template
                )
        return None


class OpenSSHChecker(BannerChecker):
    technology = Technology.OPENSSH
    pattern = (
        r"^(?P<wholematch>SSH-(?P<sshversion>\d+\.\d+)-OpenSSH_"
        r"(?P<version>\d+\.\d+([a-z]\d+)?)( (?P<os>[a-zA-Z0-9]+))?)"
    )


class EximChecker(BannerChecker):
    technology = Technology.EXIM
    pattern = (
        r"^(?P<wholematch>\d\d\d ([a-zA-Z0-9-]+\.)?([a-zA-Z0-9-]+\.)?[a-zA-Z0-9-]+ "
        r"(?P<smtpprotocol>E?SMTP) Exim (?P<version>\d+\.\d+(\.\d+)?) )"
    )


class ProFTPDChecker(BannerChecker):
    technology = Technology.PROFTPD
    pattern = (
        r"^(?P<wholematch>\d\d\d ProFTPD (?P<version>\d+\.\d+\.\d+[a-z]?) "
        r"Server \((?P<name>.+)\))"
    )


class MySQLChecker(BannerChecker):
    technology = Technology.MYSQL
    pattern = r"(?s)(?P<wholematch>(?P<version>\d+\.\d+\.\d+).+mysql_native_password)"
    keep_left = 10
    keep_right = 10

    def accepts(self, line: str) -> bool:
        # MariaDB handshakes look the same
        return "mariadb" not in line.lower()


class DovecotChecker(BannerChecker):
    technology = Technology.DOVECOT
    # * OK [CAPABILITY IMAP4rev1 ... AUTH=LOGIN] Dovecot (Ubuntu) ready.
    pattern = r"(?P<wholematch>OK (\[.+\] )?Dovecot .* ready\.)"
    keep_left = 10
