"""Repository compliance checks."""
