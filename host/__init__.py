from calculator.models import EquityConfig

try:
    from .server import EquityServer
except ModuleNotFoundError:  # Optional dependency for offline calculator use
    EquityServer = None

__all__ = ["EquityConfig", "EquityServer"]
