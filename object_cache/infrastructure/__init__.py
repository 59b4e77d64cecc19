"""Infrastructure layer: storage tiers and backend adapters."""
