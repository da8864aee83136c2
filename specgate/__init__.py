"""specgate: consistency gate for a specify -> generate -> verify pipeline."""

__version__ = "0.1.0"
