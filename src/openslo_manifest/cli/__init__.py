"""Command-line interface for openslo-manifest."""
