"""Command line interface for branchstore."""
