from .llm_agent import LLMAgent

__all__ = ["LLMAgent"]
