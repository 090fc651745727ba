"""Single-attempt HTTP reachability probe with a hard timeout."""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Literal, Optional

import httpx

from registry.services.settings import PROBE_TIMEOUT_SECONDS

# Some sites answer bots with 403; look like a browser
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}


@dataclass
class ProbeResult:
    """Outcome of probing one URL.

    Attributes:
        url: Probed URL
        status: "accessible" for 2xx, otherwise "inaccessible"
        status_code: HTTP status, None when no response arrived
        error: Reason text for inaccessible results
    """

    url: str
    status: Literal["accessible", "inaccessible"]
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "accessible"


async def probe_url(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    headers: Optional[dict[str, str]] = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> ProbeResult:
    """Request url once; timeouts and transport errors become inaccessible results."""
    try:
        response = await asyncio.wait_for(
            client.request(method, url, headers=headers, follow_redirects=True),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        return ProbeResult(
            url=url,
            status="inaccessible",
            error=f"Timeout of {int(timeout * 1000)}ms exceeded for {url}.",
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return ProbeResult(url=url, status="inaccessible", error=str(e) or type(e).__name__)

    if response.is_success:
        return ProbeResult(url=url, status="accessible", status_code=response.status_code)
    return ProbeResult(
        url=url,
        status="inaccessible",
        status_code=response.status_code,
        error=response.reason_phrase,
    )


@asynccontextmanager
async def open_client(
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the given client, or a fresh one closed on exit."""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned
