"""Version constraint and import specifier models and parsing."""
