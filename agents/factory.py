from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base_agent import BaseAgent
from .registry import resolve_agent_class
from .spec import AgentSpec


@dataclass
class PreparedAgent:
    """An instantiated agent together with the spec it was built from."""

    spec: AgentSpec
    agent: BaseAgent


def create_agent_from_spec(spec: AgentSpec, **overrides: Any) -> PreparedAgent:
    """
    Instantiate the registered class for ``spec.type``.

    ``overrides`` take precedence over ``spec.params``.
    """
    agent_cls = resolve_agent_class(spec.type)
    params = {**spec.params, **overrides}
    agent = agent_cls(side=spec.side, name=spec.name, **params)
    return PreparedAgent(spec=spec, agent=agent)
