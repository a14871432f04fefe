"""Stage 3 — path network and path-length estimates."""
