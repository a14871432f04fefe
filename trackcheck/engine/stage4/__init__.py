"""Stage 4 — assessment: performance, balance, suggestions, visual feedback."""
