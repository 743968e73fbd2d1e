"""Interfaces/abstracciones del Core.

- Define contratos (Protocol) que implementan adaptadores y servicios.
- El Core depende de abstracciones, no de implementaciones concretas.
"""
