"""Core application settings, context, and auth."""
