"""Heart failure self-management diary."""

__version__ = "0.1.0"
