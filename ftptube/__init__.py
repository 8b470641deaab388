"""FTP browser and YouTube comment scraper served over FastAPI."""

__version__ = "1.0.0"
