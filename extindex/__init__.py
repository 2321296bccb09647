"""
Builds the static extension index (extindex.json) consumed by the launcher.
"""

__version__ = "0.1.0"
