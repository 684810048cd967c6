"""Build-time RSS/Atom ingestion for the site's featured posts."""
