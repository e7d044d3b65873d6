"""Graph construction: naming, rank layout, edge inference, DOT output."""
