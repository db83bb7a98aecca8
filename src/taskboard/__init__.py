# Rev 0.7.0
"""taskBoard desktop client."""

__version__ = "0.7.0"
