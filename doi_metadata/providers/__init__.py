"""Registry providers used by the metadata services."""
