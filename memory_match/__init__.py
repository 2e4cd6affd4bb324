"""Memory Match - single-screen memory card game backend."""

__version__ = "0.1.0"
