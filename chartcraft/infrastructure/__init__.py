"""Environment, settings, durable storage and request sequencing."""
