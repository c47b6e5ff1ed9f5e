"""Command line interface for polyscript."""
