"""HTTP client for the v0 UI generation API."""

from dataclasses import dataclass

import httpx
import structlog

from prole_cli.configuration.exceptions import V0ApiError
from prole_cli.v0.models import V0Chat

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass
class V0Client:
    """Creates v0 chats. Requests are made once; errors are not retried."""

    api_key: str
    base_url: str = "https://api.v0.dev/v1"
    transport: httpx.BaseTransport | None = None
    timeout: float | None = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def create_chat(self, prompt: str) -> V0Chat:
        """Generate UI from a prompt."""
        logger.info("Creating v0 chat", base_url=self.base_url, prompt_length=len(prompt))
        with httpx.Client(
            base_url=self.base_url.rstrip("/"),
            headers=self._headers(),
            transport=self.transport,
            timeout=self.timeout,
        ) as client:
            try:
                response = client.post("/chats", json={"message": prompt})
            except httpx.HTTPError as exc:
                raise V0ApiError(f"Request to v0 API failed: {exc}") from exc

        if not response.is_success:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") if isinstance(body, dict) else None
            logger.error("v0 API error", status_code=response.status_code, message=message)
            raise V0ApiError(message or f"API error: {response.status_code}", status_code=response.status_code)

        return V0Chat.model_validate(response.json())
