"""Repository initialization."""
