"""Servicios del Core: disparo de jobs, polling y validación de respuestas."""
