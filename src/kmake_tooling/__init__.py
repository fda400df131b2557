"""kmake: containerized Linux kernel cross-compilation tooling."""

__version__ = "0.1.0"
