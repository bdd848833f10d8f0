"""FastAPI service exposing portfolio performance against a benchmark."""
