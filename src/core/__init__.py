"""Núcleo: dominio, servicios y configuración (sin CLI ni I/O de red)."""
