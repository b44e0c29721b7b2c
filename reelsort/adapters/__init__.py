"""Adaptateurs : client TMDB, systeme de fichiers, parsing, CLI."""
