"""Synthetic unstructured-mesh I/O benchmark: prism grids, timers and per-task output."""

__version__ = "0.1.0"

__all__ = ["args", "cli", "grid", "pdirs", "przm", "timer", "xdmf"]