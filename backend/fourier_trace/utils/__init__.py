"""Engine-independent helpers."""
