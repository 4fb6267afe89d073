"""Soccer Club Pro front door."""
