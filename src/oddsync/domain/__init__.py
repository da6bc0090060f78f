"""Domain layer: election odds model, errors, ports and reconciliation."""
