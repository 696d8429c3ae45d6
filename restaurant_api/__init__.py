"""Restaurant ordering backend."""
