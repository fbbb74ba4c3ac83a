"""Parse web server access logs and rank the most requested paths."""

__version__ = "0.1.0"
