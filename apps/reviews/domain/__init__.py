"""Review entities and the rating aggregator."""
