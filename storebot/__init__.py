"""Chat bot that recommends local businesses in supported Taiwanese districts."""

__version__ = "0.1.0"
