"""Command-line interface for riskbook."""
