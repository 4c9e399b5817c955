"""Application layer: notification engines and use cases."""
