"""faultflow - fault-report lifecycle client for property management."""

__version__ = "0.1.0"
