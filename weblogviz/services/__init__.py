"""Services layer - parsing, source access, ingestion and aggregation."""
