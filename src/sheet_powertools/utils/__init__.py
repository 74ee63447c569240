"""Internal helpers shared across sheet-powertools subpackages."""
