"""Server pipeline: gateway, error mapping, negotiation, sending, static files."""
