"""Host shell: lifecycle contract, event bus, visualizer registry and headless runner."""
