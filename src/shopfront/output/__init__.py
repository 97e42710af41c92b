"""Output layer — rich rendering for the CLI."""
