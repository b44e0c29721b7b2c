"""
ReelSort - Rangement automatique d'une mediatheque video.

Ce package scanne la racine d'une bibliotheque, identifie chaque fichier video
via TMDB et deplace les fichiers reconnus dans une arborescence canonique
(Movies/ et TV Shows/), en tenant a jour l'etat des fichiers et des scans.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, ports, objets valeur, exceptions)
- services/ : Couche application (crawl, extraction, matching, rangement, orchestration)
- adapters/ : Couche infrastructure (CLI, client TMDB, systeme de fichiers)
- infrastructure/ : Persistance SQLite via SQLModel
- web/ : Routes FastAPI pour lancer un scan et suivre sa progression
"""
