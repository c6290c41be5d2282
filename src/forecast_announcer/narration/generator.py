"""Language model client for generating forecast narration."""

import logging

from openai import AsyncOpenAI

from forecast_announcer.config import OPENAI_MODEL, OPENAI_TEMPERATURE

logger = logging.getLogger(__name__)


class NarrationGenerator:
    """Sends prompts to the OpenAI chat completions API."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str = OPENAI_MODEL,
        temperature: float = OPENAI_TEMPERATURE
    ):
        """Initialize the generator.

        Args:
            client: OpenAI client; failures are not retried, so build it with max_retries=0
            model: Model identifier
            temperature: Sampling temperature
        """
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_api_key(cls, api_key: str, **kwargs) -> "NarrationGenerator":
        """Create a generator with its own OpenAI client."""
        return cls(AsyncOpenAI(api_key=api_key, max_retries=0), **kwargs)

    async def generate(self, prompt: str) -> str:
        """Run the prompt through the model and return the raw completion text.

        Errors from the OpenAI SDK (network, authentication, quota) propagate unchanged.
        """
        logger.info(f"Requesting narration from {self.model} ({len(prompt)} prompt chars)")
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature
        )

        content = response.choices[0].message.content or ""
        logger.info(f"Received narration ({len(content)} chars)")
        return content

    async def aclose(self):
        """Close the OpenAI client."""
        await self.client.close()
