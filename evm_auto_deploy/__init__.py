"""Sequential random-token deployment tool for EVM networks."""

__version__ = "0.1.0"
