"""Infrastructure adapters: persistence and push delivery."""
