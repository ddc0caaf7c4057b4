"""
Rendering helpers for the presentation layer.

Drawing, animation and input widgets live outside this package; it only
turns the game state into a JSON snapshot with highlight sets.
"""

from .render_state import RenderStateBuilder

__all__ = ["RenderStateBuilder"]
