"""Name -> agent class registry, filled by the ``register_agent`` decorator."""

from typing import Callable, Dict, Type, TYPE_CHECKING

if TYPE_CHECKING:
    from .base_agent import BaseAgent

_REGISTRY: Dict[str, Type["BaseAgent"]] = {}


def register_agent(name: str) -> Callable[[Type["BaseAgent"]], Type["BaseAgent"]]:
    def decorator(cls: Type["BaseAgent"]) -> Type["BaseAgent"]:
        if name in _REGISTRY and _REGISTRY[name] is not cls:
            raise ValueError(f"Agent type {name!r} is already registered")
        _REGISTRY[name] = cls
        return cls

    return decorator


def resolve_agent_class(name: str) -> Type["BaseAgent"]:
    try:
        return _REGISTRY[name]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY)) or "none"
        raise ValueError(f"Unknown agent type {name!r} (known: {known})") from None


def registered_agent_types() -> list[str]:
    return sorted(_REGISTRY)
