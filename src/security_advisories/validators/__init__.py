"""Schema validation for built conflict documents."""
