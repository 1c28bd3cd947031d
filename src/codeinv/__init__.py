"""
codeinv - Local file inventory: scanning, language detection and content loading.
"""

__version__ = "0.1.0"
