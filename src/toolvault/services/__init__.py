"""Service layer: database operations behind the API routes."""
