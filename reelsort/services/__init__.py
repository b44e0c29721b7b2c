"""
Services applicatifs de ReelSort.

- scanner : parcours de la bibliotheque (DirectoryCrawler)
- similarity : score de similarite de titres
- matcher : identification automatique via le service de recherche
- organizer : construction des chemins de destination
- transferer : deplacement/copie des fichiers
- scan_job : orchestration d'un scan complet
"""
