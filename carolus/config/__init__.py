"""Runtime configuration for Carolus."""
