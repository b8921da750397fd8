"""Adapters connecting the domain to remote pages and local files."""
