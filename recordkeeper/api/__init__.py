"""HTTP surface for the audit record engine."""
