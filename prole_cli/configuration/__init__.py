"""Configuration, environment settings and the command line interface."""
