"""JSON Schema contracts for path2enum artifacts."""
