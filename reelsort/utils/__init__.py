"""Utilitaires partages de ReelSort."""
