"""Modelos y errores del dominio.

Estructuras de datos puras y estrictas (Pydantic v2). El dominio no sabe nada
de HTTP, la CLI ni SDKs: solo de jobs, servidores y sus estados.
"""
