"""dorgpatch: patch and interdiff workflow for Drupal.org issues."""

__version__ = "0.1.0"

__all__ = ["__version__"]
