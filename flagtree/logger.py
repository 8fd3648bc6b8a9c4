# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Flagtree CLI applications."""
import logging

logger: logging.Logger = logging.getLogger("flagtree")
