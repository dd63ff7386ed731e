"""
Contract question answering with the OpenAI Chat Completions API.

Each call is stateless: one system instruction plus one user message
holding the contract text and the question.
"""

import logging
from typing import Any

from openai import OpenAI, OpenAIError

from ..config import Settings, get_settings
from ..exceptions import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

# =============================================================================
# Prompt
# =============================================================================

SYSTEM_PROMPT = (
    "You are a knowledgeable legal assistant. Answer the user's questions about the provided contract. "
    "Only use information contained in the contract and avoid making assumptions. "
    "If the contract does not specify the answer, respond that the information is not available."
)

USER_PROMPT_TEMPLATE = "Contract:\n\n{contract_text}\n\nQuestion: {question}"

TEMPERATURE = 0.2
MAX_TOKENS = 512


def build_messages(contract_text: str, question: str) -> list[dict[str, str]]:
    """Build the two chat messages sent for a question."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(
                contract_text=contract_text, question=question
            ),
        },
    ]


class AnswerService:
    """
    Service answering questions about a contract using OpenAI.

    The contract text is sent in full; no truncation is applied.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "gpt-4o",
        timeout: float = 60.0,
        client: Any | None = None,
    ):
        """
        Initialize the answer service.

        Args:
            api_key: OpenAI API key. Answering fails without it.
            model: Chat model to use.
            timeout: Seconds before an OpenAI request is abandoned.
            client: Pre-built OpenAI client, mainly for tests.
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnswerService":
        return cls(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.openai_timeout,
        )

    @property
    def client(self):
        """Lazy-load the OpenAI client."""
        if self._client is None:
            if not self.api_key:
                logger.error("OpenAI API key not provided. Set OPENAI_API_KEY.")
                raise ConfigurationError("Server is misconfigured: missing OpenAI API key.")
            # No automatic retries: a failed call is reported straight back
            self._client = OpenAI(
                api_key=self.api_key, timeout=self.timeout, max_retries=0
            )
        return self._client

    def answer(self, contract_text: str, question: str) -> str:
        """
        Ask the model a question about the contract.

        Args:
            contract_text: Full extracted contract text.
            question: The user's question.

        Returns:
            The first completion's text, stripped; empty if none was returned.

        Raises:
            ConfigurationError: If no OpenAI key is configured.
            ProviderError: If the OpenAI request fails.
        """
        client = self.client

        logger.info(
            "Requesting answer (model=%s, contract=%d chars)",
            self.model,
            len(contract_text),
        )

        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=build_messages(contract_text, question),
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
            )
        except OpenAIError as e:
            logger.exception("OpenAI API request failed")
            raise ProviderError("Failed to retrieve answer from OpenAI.") from e

        if not response.choices:
            logger.warning("OpenAI returned no choices")
            return ""

        content = response.choices[0].message.content
        return (content or "").strip()


# Singleton instance for convenience
_answer_service: AnswerService | None = None


def get_answer_service() -> AnswerService:
    """Get or create the answer service singleton."""
    global _answer_service
    if _answer_service is None:
        _answer_service = AnswerService.from_settings(get_settings())
    return _answer_service
