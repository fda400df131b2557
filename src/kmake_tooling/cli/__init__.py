"""kmake command-line entry points."""
