"""Registry mapping technologies to the checkers able to identify them."""

from collections.abc import Iterable

from sanca.models.technology import Technology

from .base import HttpChecker, TcpChecker


class CheckerRegistry:
    """Hold one TCP and one HTTP checker at most per technology."""

    def __init__(self, checkers: Iterable[TcpChecker | HttpChecker] | None = None):
        self._tcp: dict[Technology, TcpChecker] = {}
        self._http: dict[Technology, HttpChecker] = {}
        for checker in checkers or []:
            self.register(checker)

    def register(self, checker: TcpChecker | HttpChecker) -> None:
        """Register or replace a checker for its technology."""
        if isinstance(checker, TcpChecker):
            self._tcp[checker.technology] = checker
        elif isinstance(checker, HttpChecker):
            self._http[checker.technology] = checker
        else:
            raise TypeError(f"Not a checker: {checker!r}")

    def technologies(self) -> list[Technology]:
        """Technologies with at least one checker, in catalog order."""
        known = self._tcp.keys() | self._http.keys()
        return [technology for technology in Technology if technology in known]

    def tcp_checkers(self, technologies: Iterable[Technology]) -> list[TcpChecker]:
        return [self._tcp[tech] for tech in _unique(technologies) if tech in self._tcp]

    def http_checkers(self, technologies: Iterable[Technology]) -> list[HttpChecker]:
        return [self._http[tech] for tech in _unique(technologies) if tech in self._http]


def _unique(technologies: Iterable[Technology]) -> list[Technology]:
    return list(dict.fromkeys(technologies))
