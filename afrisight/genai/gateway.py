"""Generative text gateway backed by LiteLLM.

The only outbound call to the language model. No retry, timeout or
backoff is applied here; a slow upstream simply makes the request slow.
"""

from typing import Optional

import litellm

from afrisight.errors import GatewayError
from afrisight.utils.logger import LoggerManager

DEFAULT_MODEL = "gemini/gemini-2.5-flash"

logger = LoggerManager.get_logger("genai_gateway")


class GenerativeTextGateway:
    """Sends a single-turn prompt to the configured model and returns its text."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL):
        """
        Args:
            api_key: Provider API key, passed explicitly on every call
            model_name: LiteLLM model identifier (provider-prefixed)
        """
        if not api_key:
            raise ValueError("Generative AI API key is required")
        self._api_key = api_key
        self.model_name = model_name
        logger.info(f"GenerativeTextGateway initialized for model: {self.model_name}")

    async def generate(self, prompt: str, model_name: Optional[str] = None) -> str:
        """Complete ``prompt``.

        Args:
            prompt: Fully assembled prompt text
            model_name: Override for the default model

        Returns:
            Completion text, or "" when the model returned no content

        Raises:
            GatewayError: On any LiteLLM or transport failure
        """
        current_model = model_name or self.model_name
        logger.info(
            f"Requesting completion from LiteLLM for model: {current_model} "
            f"with prompt (first 100 chars): '{prompt[:100]}...'"
        )

        try:
            response = await litellm.acompletion(
                model=current_model,
                messages=[{"role": "user", "content": prompt}],
                api_key=self._api_key,
            )
        except Exception as e:
            logger.error(
                "LiteLLM completion failed",
                extra={"extra_data": {"model": current_model, "error": str(e)}},
            )
            raise GatewayError.from_api_error(e) from e

        if (
            getattr(response, "choices", None)
            and response.choices[0].message
            and response.choices[0].message.content
        ):
            content = response.choices[0].message.content
            logger.info(f"Completion received via LiteLLM. Length: {len(content)} chars.")
            return content

        logger.warning("No completion content received from LiteLLM or content is empty.")
        return ""
