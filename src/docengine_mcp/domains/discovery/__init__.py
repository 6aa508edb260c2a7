"""Discovery domain - listing documents and reading document info."""
