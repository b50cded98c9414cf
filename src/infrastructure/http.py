import aiohttp
from typing import Any

REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=60, connect=10)


async def read_json(response: aiohttp.ClientResponse) -> Any:
    """Decodes a response body as JSON, returning None for empty or non-JSON bodies."""
    try:
        return await response.json(content_type=None)
    except (aiohttp.ContentTypeError, ValueError):
        return None
