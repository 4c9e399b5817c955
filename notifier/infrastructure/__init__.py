"""Infrastructure layer: persistence, vendor adapters and realtime push."""
