import aiohttp
import asyncio
import logging
import random
import time
from typing import Any, Dict, List, Optional, Tuple

from src.domain.exceptions import ApiRequestException, RateLimitExceededException
from src.infrastructure.http import REQUEST_TIMEOUT, read_json

logger = logging.getLogger(__name__)

# Rate-limited requests are retried this many times, then abandoned
MAX_RATE_LIMIT_RETRIES = 2
MAX_SERVER_ERROR_RETRIES = 3
DEFAULT_SECONDARY_WAIT = 60
SERVER_ERROR_STATUSES = {500, 502, 503, 504}
RATE_LIMIT_STATUSES = {403, 429}

class GitHubRestClient:
    """
    Client for the read-only GitHub REST endpoints the report needs.
    Handles authentication and retries primary/secondary rate limits and server errors.
    """

    def __init__(self, token: Optional[str] = None, api_url: str = "https://api.github.com"):
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "github-stats-report",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        self.api_url = api_url.rstrip("/")

    async def get(
        self,
        session: aiohttp.ClientSession,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Performs a GET request and returns the decoded JSON body (None for empty bodies).

        Raises:
            RateLimitExceededException: still rate limited after MAX_RATE_LIMIT_RETRIES retries.
            ApiRequestException: any other non-success answer, or server errors past the retry budget.
        """
        url = f"{self.api_url}{path}"
        rate_limit_retries = 0
        server_retries = 0

        while True:
          try:
            async with session.get(url, params=params, headers=self.headers, timeout=REQUEST_TIMEOUT) as response:
                if response.status in RATE_LIMIT_STATUSES:
                    body = await read_json(response) or {}
                    rate_limit = self._detect_rate_limit(response.status, response.headers, body)
                    if rate_limit is not None:
                        kind, wait = rate_limit
                        if rate_limit_retries >= MAX_RATE_LIMIT_RETRIES:
                            raise RateLimitExceededException(
                                kind=kind,
                                retry_after=wait,
                                status=response.status,
                                documentation_url=body.get("documentation_url"),
                            )
                        rate_limit_retries += 1
                        logger.warning(
                            f"{kind.capitalize()} rate limit hit for {path}, retrying after {wait:.0f} seconds "
                            f"(retry {rate_limit_retries}/{MAX_RATE_LIMIT_RETRIES})..."
                        )
                        await asyncio.sleep(wait)
                        continue

                if response.status in SERVER_ERROR_STATUSES and server_retries < MAX_SERVER_ERROR_RETRIES:
                    sleep_time = (2 ** server_retries) + random.uniform(0, 1)
                    server_retries += 1
                    logger.warning(
                        f"Server error ({response.status}) for {path}, "
                        f"retrying in {sleep_time:.1f}s (retry {server_retries}/{MAX_SERVER_ERROR_RETRIES})..."
                    )
                    await asyncio.sleep(sleep_time)
                    continue

                if response.status >= 400:
                    body = await read_json(response)
                    if not isinstance(body, dict):
                        body = {}
                    raise ApiRequestException(
                        status=response.status,
                        message=body.get("message"),
                        documentation_url=body.get("documentation_url"),
                    )

                if response.status == 204:
                    return None
                return await read_json(response)

          except (aiohttp.ClientError, asyncio.TimeoutError) as e:
              if server_retries >= MAX_SERVER_ERROR_RETRIES:
                  raise
              sleep_time = (2 ** server_retries) + random.uniform(0, 1)
              server_retries += 1
              logger.warning(
                  f"Request to {path} failed: {e!r}. "
                  f"Retrying in {sleep_time:.1f}s (retry {server_retries}/{MAX_SERVER_ERROR_RETRIES})..."
              )
              await asyncio.sleep(sleep_time)

    @staticmethod
    def _detect_rate_limit(status: int, headers, body: Dict[str, Any]) -> Optional[Tuple[str, float]]:
        """Returns (kind, seconds to wait) when a 403/429 answer is a rate limit, else None."""
        message = str(body.get("message", "")).lower()
        retry_after = headers.get("Retry-After")
        if retry_after is not None or "secondary rate limit" in message:
            try:
                return "secondary", float(retry_after)
            except (TypeError, ValueError):
                return "secondary", float(DEFAULT_SECONDARY_WAIT)

        if headers.get("x-ratelimit-remaining") == "0":
            reset = headers.get("x-ratelimit-reset")
            try:
                wait = max(float(reset) - time.time(), 0.0)
            except (TypeError, ValueError):
                wait = float(DEFAULT_SECONDARY_WAIT)
            return "primary", wait

        if status == 429:
            return "secondary", float(DEFAULT_SECONDARY_WAIT)
        return None

    async def get_repository(self, session: aiohttp.ClientSession, owner: str, name: str) -> Dict[str, Any]:
        return await self.get(session, f"/repos/{owner}/{name}") or {}

    async def get_commit_activity(self, session: aiohttp.ClientSession, owner: str, name: str) -> List[Dict[str, Any]]:
        """
        Weekly commit activity for the last year, oldest week first.
        GitHub answers 202 with an empty body while the statistics are computed; that reads as no activity.
        """
        data = await self.get(session, f"/repos/{owner}/{name}/stats/commit_activity")
        return data if isinstance(data, list) else []

    async def list_releases(
        self, session: aiohttp.ClientSession, owner: str, name: str, per_page: int = 1
    ) -> List[Dict[str, Any]]:
        data = await self.get(session, f"/repos/{owner}/{name}/releases", params={"per_page": per_page})
        return data if isinstance(data, list) else []

    async def list_closed_issues(
        self, session: aiohttp.ClientSession, owner: str, name: str, per_page: int = 1
    ) -> List[Dict[str, Any]]:
        data = await self.get(
            session,
            f"/repos/{owner}/{name}/issues",
            params={"state": "closed", "per_page": per_page},
        )
        return data if isinstance(data, list) else []
