"""ToolVault: a bookmark catalog API with optional admin gating."""

__version__ = "0.1.0"
