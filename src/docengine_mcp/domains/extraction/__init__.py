"""Extraction domain - text, search, tables, key-value pairs and page rendering."""
