"""Adapters behind the domain ports: persistence, auth, email, scheduling and the HTTP API."""
