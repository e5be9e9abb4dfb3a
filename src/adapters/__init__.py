"""Adaptadores de infraestructura (HTTP, directorio)."""
