"""Stage 1 — track structure: connectivity, width, coverage."""
