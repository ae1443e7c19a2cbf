"""Application layer: use cases orchestrating the notification pipeline."""
