"""Client for the v0 UI generation API."""
