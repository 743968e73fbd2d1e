"""Core del runner: dominio, configuración y servicios."""
