import logging
import random
from typing import Optional

import httpx

from docscout.core.errors import (
    AuthenticationFailedError,
    NetworkError,
    NotFoundError,
    RateLimitExceededError,
)

logger = logging.getLogger(__name__)

SAFARI_USER_AGENTS = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/16.6 Safari/605.1.15",
    "Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Mobile/15E148 Safari/604.1",
)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Numeric ``Retry-After`` seconds; HTTP-date values are ignored."""
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def raise_for_status(response: httpx.Response) -> None:
    """Map a non-2xx response onto the retrieval error taxonomy."""
    status = response.status_code
    if 200 <= status < 300:
        return

    url = str(response.request.url)
    if status == 404:
        raise NotFoundError(url)
    if status == 429:
        raise RateLimitExceededError(parse_retry_after(response.headers.get("Retry-After")))
    if status in (401, 403):
        raise AuthenticationFailedError(f"Authentication failed ({status}) for {url}")
    raise NetworkError(f"Unexpected HTTP {status} from {url}", status_code=status)


class DocsHttpClient:
    """Thin async HTTP wrapper shared by the retrievers.

    Adds a rotating Safari User-Agent to every request, applies the per-call
    timeout and turns HTTP and transport failures into retrieval errors.
    Requests are never retried.
    """

    def __init__(
        self,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
        user_agents: tuple[str, ...] = SAFARI_USER_AGENTS,
    ):
        self._timeout = timeout
        self._client = client or httpx.AsyncClient(follow_redirects=True)
        self._user_agents = user_agents

    def user_agent(self) -> str:
        return random.choice(self._user_agents)

    async def get(self, url: str, headers: Optional[dict[str, str]] = None) -> httpx.Response:
        """GET a URL.

        Raises:
            NotFoundError, RateLimitExceededError, AuthenticationFailedError:
                For 404, 429 and 401/403 responses.
            NetworkError: Any other non-2xx response or a transport failure.
        """
        request_headers = {"User-Agent": self.user_agent()}
        request_headers.update(headers or {})

        try:
            response = await self._client.get(url, headers=request_headers, timeout=self._timeout)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Request to {url} timed out after {self._timeout:g}s") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        logger.debug(f"GET {url} -> {response.status_code} ({len(response.content)} bytes)")
        raise_for_status(response)
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DocsHttpClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
