"""LLM Module - LLM services and interfaces."""
from planner.llm.interfaces import LLMProvider
from planner.llm.openai_service import OpenAIService

__all__ = ['LLMProvider', 'OpenAIService']
