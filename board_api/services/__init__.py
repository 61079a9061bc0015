"""Service layer: credentials, board store, attachment storage and board use cases."""
