"""Modelos, errores y catálogo de operaciones.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2).
- El dominio no conoce httpx ni la CLI: solo qué se pide y qué se recibe.
"""
