"""Abstract interface for chat model inference."""

from abc import ABC, abstractmethod
from typing import Any


class InferenceClient(ABC):
    """Abstract base class for text-generation backends."""

    @abstractmethod
    async def generate(
        self, model_identifier: str, inputs: str, instructions: str | None = None
    ) -> Any:
        """
        Runs one generation call against a model.

        Args:
            model_identifier: The model to call.
            inputs: The user message.
            instructions: System prompt for backends that accept one; others
                ignore it.

        Returns:
            The decoded response payload, either a list whose first element
            carries `generated_text` or a mapping with `generated_text`.

        Raises:
            Exception: Any transport or API failure.
        """
        pass
