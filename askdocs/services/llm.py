"""OpenAI LLM service for answer generation."""

from typing import Optional

from openai import AsyncOpenAI

from askdocs.core.config import settings
from askdocs.core.exceptions import external_service_error

PROVIDER = "OpenAI"


class LLMService:
    """Service for single-turn, non-streaming completions."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        """
        Initialize the LLM service.

        Args:
            client: OpenAI client handle owned by the service container.
            model: Chat model name.
            temperature: Fixed sampling temperature.
            max_tokens: Completion token limit.
        """
        self.client = client
        self.model = model or settings.llm_model
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.max_tokens = max_tokens or settings.llm_max_tokens

    async def complete(self, system_prompt: str, user_prompt: str) -> Optional[str]:
        """
        Generate a completion for a system and user prompt.

        Args:
            system_prompt: Instruction for the model.
            user_prompt: Context and question.

        Returns:
            The generated text, or None when the response carries no text.

        Raises:
            RAGError: If the request to the provider fails.
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise external_service_error(
                PROVIDER, f"Failed to generate answer: {str(e)}", cause=e) from e

        choices = getattr(response, "choices", None)
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None)
