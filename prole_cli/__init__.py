"""PROLE-ISLAND repository scaffolding and template synchronization CLI."""

__version__ = "0.2.0"
