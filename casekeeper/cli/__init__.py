"""Command-line interface for casekeeper."""
