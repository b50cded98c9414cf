from typing import Optional


class StatsException(Exception):
    """Base exception for all stats-report errors."""
    pass

class ApiRequestException(StatsException):
    """Raised when an upstream API answers with a non-success status."""
    def __init__(self, status: int, message: Optional[str] = None, documentation_url: Optional[str] = None):
        self.status = status
        self.message = message or "API request failed."
        self.documentation_url = documentation_url
        super().__init__(f"{self.message} (status {status})")

class RateLimitExceededException(ApiRequestException):
    """Raised when a request is still rate limited after all retries are used."""
    def __init__(self, kind: str, retry_after: float, status: int = 403, documentation_url: Optional[str] = None):
        self.kind = kind
        self.retry_after = retry_after
        super().__init__(
            status=status,
            message=f"GitHub API {kind} rate limit exceeded. Retry after {retry_after:.0f}s.",
            documentation_url=documentation_url,
        )
