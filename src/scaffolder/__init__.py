"""scaffolder - materialize projects from declarative scaffold configurations."""

__version__ = "0.1.0"
