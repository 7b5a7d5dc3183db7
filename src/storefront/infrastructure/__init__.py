"""Infrastructure layer: persistence, authentication, storage and the HTTP API."""
