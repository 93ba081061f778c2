"""Core services: alias resolution, alias administration, scoring, profiles."""
