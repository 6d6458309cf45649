"""Visualizers, registered on import via @visualizer."""
