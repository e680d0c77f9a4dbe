"""Report data models."""

from dataclasses import dataclass

from sanca.models.reqres import hostname_port


@dataclass
class ReportContext:
    """Where the findings come from."""

    ip_hostname: str | None = None
    port: int | None = None
    url: str | None = None

    @classmethod
    def for_target(
        cls, ip_hostname: str | None = None, port: int | None = None, url: str | None = None
    ) -> "ReportContext":
        """Build the context, deriving host and port from the URL of HTTP scans."""
        if url:
            ip_hostname, port = hostname_port(url)
        return cls(ip_hostname=ip_hostname, port=port, url=url)
