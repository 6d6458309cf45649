"""Fourier epicycle trace animation."""
