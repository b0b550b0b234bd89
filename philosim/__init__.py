"""Dining philosophers simulation with a waiter lock, a starvation monitor and a command line."""

__version__ = "0.1.0"
__all__ = ["config", "simulation", "cli"]