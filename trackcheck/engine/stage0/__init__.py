"""Stage 0 — raster sampling: pixels to the traversable mask."""
