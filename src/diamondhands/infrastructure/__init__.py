"""Infrastructure layer: ledger access, encodings and logging."""
