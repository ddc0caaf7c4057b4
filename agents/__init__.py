"""
Agent interface and implementations for Skirmish.

This module provides:
- BaseAgent: Abstract interface for all agents
- GreedyAgent: The computer's difficulty-driven planner
- RandomAgent: Simple random action agent for testing
- LLMAgent: Language-model move source
"""

from .base_agent import BaseAgent
from .factory import PreparedAgent, create_agent_from_spec

from .registry import register_agent, registered_agent_types, resolve_agent_class
from .spec import AgentSpec
from .random_agent import RandomAgent
from .greedy_agent import GreedyAgent
from .llm_agent import LLMAgent

__all__ = [
    "BaseAgent",
    "AgentSpec",
    "PreparedAgent",
    "create_agent_from_spec",
    "register_agent",
    "registered_agent_types",
    "resolve_agent_class",
    "RandomAgent",
    "GreedyAgent",
    "LLMAgent",
]
