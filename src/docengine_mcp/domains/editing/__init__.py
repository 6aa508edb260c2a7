"""Editing domain - page-level document transformations."""
