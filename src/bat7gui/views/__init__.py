"""Top-level views composed from components and view models."""
