"""SVG asset loading and arc-length point sampling."""
