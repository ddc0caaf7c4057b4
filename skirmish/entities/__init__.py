from .unit import Unit, unit_order_key
from .support import PendingAttack, SupportLine

__all__ = ["Unit", "unit_order_key", "SupportLine", "PendingAttack"]
