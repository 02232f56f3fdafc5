from .protocol import JobRegistry
from .memory import InMemoryJobRegistry

__all__ = ["JobRegistry", "InMemoryJobRegistry"]
