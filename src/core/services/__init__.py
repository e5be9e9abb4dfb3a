"""Servicios del Core: derivación de identificadores y generación de credenciales."""
