"""Materials inventory service."""
