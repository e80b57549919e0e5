"""Command-line interface for groqchat."""
