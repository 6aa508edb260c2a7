"""Health domain - server and backend status."""
