"""Arena fixture package: components for system map tests."""
