"""Adaptadores de I/O (HTTP) del runner."""
