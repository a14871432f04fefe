"""Stage 2 — start and token areas."""
