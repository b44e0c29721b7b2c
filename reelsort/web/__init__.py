"""Interface HTTP de ReelSort (FastAPI)."""
