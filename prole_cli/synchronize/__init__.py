"""Synchronization of repository metadata against organization templates."""
