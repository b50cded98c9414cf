import aiohttp
import logging
from typing import Any, Dict
from urllib.parse import quote

from src.domain.exceptions import ApiRequestException
from src.infrastructure.http import REQUEST_TIMEOUT, read_json

logger = logging.getLogger(__name__)

class StackExchangeClient:
    """Unauthenticated client for the Stack Exchange tag info endpoint."""

    def __init__(self, site: str = "stackoverflow", api_url: str = "https://api.stackexchange.com/2.3"):
        self.site = site
        self.api_url = api_url.rstrip("/")

    async def get_tag_info(self, session: aiohttp.ClientSession, tag: str) -> Dict[str, Any]:
        """
        Fetches the tag info wrapper object for a single tag.

        Returns:
            Dict[str, Any]: The response wrapper; tag entries are under "items".
        """
        url = f"{self.api_url}/tags/{quote(tag, safe='')}/info"
        async with session.get(url, params={"site": self.site}, timeout=REQUEST_TIMEOUT) as response:
            body = await read_json(response)
            if not isinstance(body, dict):
                body = {}
            if response.status != 200:
                raise ApiRequestException(status=response.status, message=body.get("error_message"))
            if body.get("backoff"):
                logger.warning(f"Stack Exchange asked to back off {body['backoff']}s after tag '{tag}'.")
            return body
