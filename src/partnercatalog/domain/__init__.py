"""Domain layer: records, collectors and reconciliation."""
