"""Payload definitions - named request bodies compiled once at load time."""
