"""Repository services that execute built statements."""
