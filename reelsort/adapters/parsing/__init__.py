"""
Parsing des noms de fichiers video.

- RegexFilenameParser : implementation de IFilenameParser par tables de regles
- parse_filename : fonction pure equivalente
"""

from reelsort.adapters.parsing.filename_parser import RegexFilenameParser, parse_filename

__all__ = ["RegexFilenameParser", "parse_filename"]
