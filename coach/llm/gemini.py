"""
Gemini Client

Handles communication with the Google Gemini generateContent REST API.
"""

from typing import Any, Dict, Optional
import json
import logging

import httpx

from config.settings import Settings, get_settings
from ..context.assembler import UpstreamPayload
from ..errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class GeminiClient:
    """
    Client for the Gemini API.

    One POST per call, no retries and no timeout.

    Usage:
        client = GeminiClient()
        envelope = await client.generate(payload)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize Gemini client.

        Args:
            settings: Application settings (defaults to get_settings())
            transport: Optional httpx transport, used by tests to fake the API
        """
        self.settings = settings or get_settings()
        self.api_key = self.settings.gemini_api_key
        self.model = self.settings.gemini_model
        self.transport = transport

    @property
    def endpoint(self) -> str:
        base_url = self.settings.gemini_base_url.rstrip("/")
        return f"{base_url}/models/{self.model}:generateContent"

    async def generate(self, payload: UpstreamPayload) -> Dict[str, Any]:
        """
        Send the payload to Gemini.

        Args:
            payload: Assembled system instruction, turns and generation config

        Returns:
            The parsed JSON envelope

        Raises:
            ConfigurationError: no API key is configured
            UpstreamError: Gemini answered with a non-2xx status
            ValueError: the success body is not valid JSON
        """
        if not self.api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY")

        async with httpx.AsyncClient(transport=self.transport, timeout=None) as client:
            response = await client.post(
                self.endpoint,
                params={"key": self.api_key},
                headers={"content-type": "application/json"},
                json=payload.to_request_body(),
            )

        # Read the raw text first so a malformed 200 fails loudly
        raw = response.text

        if not response.is_success:
            logger.warning(f"Gemini call failed with status {response.status_code}")
            raise UpstreamError(response.status_code, raw)

        return json.loads(raw)
