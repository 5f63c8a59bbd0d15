# ABOUTME: Location Scout - filming location extraction from movie web pages
# ABOUTME: Package root exposing the per-page extraction entry point

from location_scout.extraction.orchestrator import extract_page

__version__ = "0.1.0"

__all__ = ["extract_page", "__version__"]
