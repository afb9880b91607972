"""Proportional symbol world map: projection, paths, radius scale and layer renderers."""
