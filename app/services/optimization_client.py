"""Optimization service using the OpenAI chat completions API."""
import json
import asyncio
from datetime import datetime
from typing import Optional, Dict, Any

from openai import OpenAI, OpenAIError

from ..core.config import settings
from ..core.exceptions import ConfigurationError, OptimizationParseError, ProviderError
from ..config.schemas import AnalysisValidationError, ResponseValidator, get_response_validator
from ..utils.logging import CorrelatedLogger
from .prompt_composer import ComposedPrompt

PROVIDER_NAME = "OpenAI"


def build_openai_client(api_key: Optional[str] = None) -> OpenAI:
    """Build the OpenAI client from settings."""
    api_key = api_key or settings.openai_api_key
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY", "not set")

    try:
        return OpenAI(api_key=api_key, timeout=settings.provider_timeout)
    except OpenAIError as e:
        raise ConfigurationError("OpenAI client", str(e))


class OptimizationClient:
    """Sends composed prompts to the model and returns validated structured results."""

    def __init__(
        self,
        client: Optional[OpenAI] = None,
        model: Optional[str] = None,
        validator: Optional[ResponseValidator] = None
    ):
        self._client = client
        self.model = model or settings.openai_model
        self.validator = validator or get_response_validator()
        self.logger = CorrelatedLogger(__name__)

    @property
    def client(self) -> OpenAI:
        """OpenAI client, built from settings on first use when none was injected."""
        if self._client is None:
            self._client = build_openai_client()
        return self._client

    async def optimize(self, prompt: ComposedPrompt, request_id: Optional[str] = None) -> Dict[str, Any]:
        """Run one model call and parse its JSON answer.

        Raises:
            ProviderError: Transport, auth or rate-limit failure from OpenAI.
            OptimizationParseError: The answer is not JSON matching the mode schema.
        """
        logger = self.logger.bind(request_id)
        start_time = datetime.now()

        logger.info(
            f"Requesting {prompt.mode} optimization "
            f"(model: {self.model}, max_tokens: {prompt.max_tokens}, temperature: {prompt.temperature})"
        )

        try:
            response = await asyncio.to_thread(
                self.client.chat.completions.create,
                model=self.model,
                messages=self._create_messages(prompt),
                max_tokens=prompt.max_tokens,
                temperature=prompt.temperature
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed for {prompt.mode}: {type(e).__name__}: {str(e)}")
            raise ProviderError(PROVIDER_NAME, str(e)) from e

        processing_time = int((datetime.now() - start_time).total_seconds() * 1000)

        content = response.choices[0].message.content if response.choices else None
        if not content:
            logger.warning(f"OpenAI response content is empty for {prompt.mode}")
            raise OptimizationParseError(prompt.mode, "Empty response from model")

        try:
            raw_data = self._extract_json_from_content(content)
        except json.JSONDecodeError as e:
            logger.warning(f"JSON decode error: {str(e)}, content: {content[:200]}...")
            raise OptimizationParseError(prompt.mode, f"Invalid JSON: {e.msg}") from e

        try:
            result = self.validator.validate_response(prompt.mode, raw_data)
        except AnalysisValidationError as e:
            raise OptimizationParseError(prompt.mode, e.message) from e

        logger.info(f"{prompt.mode} optimization completed in {processing_time}ms")
        return result

    def _create_messages(self, prompt: ComposedPrompt) -> list:
        """Create the chat messages for a composed prompt."""
        return [
            {
                "role": "system",
                "content": prompt.system_role
            },
            {
                "role": "user",
                "content": prompt.instruction_text
            }
        ]

    def _extract_json_from_content(self, content: str) -> Any:
        """Extract and parse JSON from the model response content."""
        json_content = content.strip()

        # Remove markdown code blocks if present
        if json_content.startswith('```json'):
            json_content = json_content[7:]
        elif json_content.startswith('```'):
            json_content = json_content[3:]

        if json_content.endswith('```'):
            json_content = json_content[:-3]

        json_content = json_content.strip()

        # Try to find JSON within the content if it's still not clean
        if not json_content.startswith('{'):
            start_idx = json_content.find('{')
            end_idx = json_content.rfind('}')
            if start_idx != -1 and end_idx != -1 and end_idx > start_idx:
                json_content = json_content[start_idx:end_idx+1]

        return json.loads(json_content)
