"""Interface adapters exposed by the service."""
