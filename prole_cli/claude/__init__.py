"""AI assistant configuration."""
