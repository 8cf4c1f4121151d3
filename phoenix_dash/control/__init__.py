from .panel import ActionResult, ControlPanel

__all__ = ["ActionResult", "ControlPanel"]
