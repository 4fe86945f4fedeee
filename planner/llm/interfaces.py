"""
LLM Provider Interface - what the ranking layer needs from a language model.

A provider turns a prompt into a JSON object that follows a given schema.
OpenAIService is the only implementation; tests substitute mocks.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class LLMProvider(ABC):

    @abstractmethod
    def extract_structured_data(
        self,
        text: str,
        schema_spec: Dict,
        system_prompt: Optional[str] = None,
        user_message: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Return the model's answer as a dict shaped by ``schema_spec``.

        ``schema_spec`` is a bare JSON schema or a wrapped
        ``{'name', 'strict', 'schema'}`` spec. ``user_message`` replaces
        ``text`` as the user turn when given.
        """
        pass
