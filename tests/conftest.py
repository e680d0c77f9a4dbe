"""Test configuration and fixtures for sanca."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
import respx

from sanca.models.finding import CVE, CVEMetrics, CVSSMetric, Finding
from sanca.models.technology import Technology

CONFIG_KEYS = (
    "SANCA_USER_AGENT",
    "SANCA_HTTP_TIMEOUT",
    "SANCA_TCP_READ_TIMEOUT",
    "SANCA_CACHE_DIR",
    "SANCA_NVD_URL",
    "SANCA_NVD_API_KEY",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's ~/.sanca and SANCA_* variables out of the tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in CONFIG_KEYS:
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_respx_routes():
    """Drop routes left on the global respx router by ``respx.mock(...)`` tests."""
    yield
    respx.mock.clear()


@asynccontextmanager
async def serve_banner(payload: bytes, close: bool = True) -> AsyncIterator[int]:
    """Serve ``payload`` to every client on a local port.

    With ``close=False`` the connection stays open after the payload until the
    context exits, so the client runs into its read timeout.
    """
    release = asyncio.Event()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        if payload:
            writer.write(payload)
            await writer.drain()
        if not close:
            await release.wait()
        writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield port
    finally:
        release.set()
        server.close()
        await server.wait_closed()


@pytest.fixture
def banner_server():
    """Factory for local TCP servers sending a fixed banner."""
    return serve_banner


def build_cve(cve_id: str, score: float | None = 7.5, version: str = "v31") -> CVE:
    """Build a CVE scored with a single CVSS metric of the given version."""
    metrics = CVEMetrics()
    if score is not None:
        metric = CVSSMetric(
            source="nvd@nist.gov",
            type="Primary",
            cvss_data={"version": "3.1", "baseScore": score},
            exploitability_score=3.9,
            impact_score=3.6,
        )
        setattr(metrics, f"cvss_metric_{version}", [metric])
    return CVE(id=cve_id, vuln_status="Analyzed", metrics=metrics)


@pytest.fixture
def make_cve():
    """Factory for scored CVE records."""
    return build_cve


@pytest.fixture
def nginx_finding() -> Finding:
    return Finding(
        technology=Technology.NGINX,
        version="1.22.0",
        evidence="nginx/1.22.0",
        evidence_text=(
            'Nginx 1.22.0 has been identified using the HTTP header "Server: nginx/1.22.0" '
            "returned at the following URL: https://example.com/"
        ),
        url_of_finding="https://example.com/",
    )
