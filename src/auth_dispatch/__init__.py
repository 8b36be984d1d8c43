"""Auth Dispatch Service: pluggable login provider dispatch."""

__version__ = "1.0.0"
