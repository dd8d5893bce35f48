"""Business Message Analyzer - Router package."""

from .engine import Dispatcher
from .models import DispatchDecision

__all__ = ["Dispatcher", "DispatchDecision"]
