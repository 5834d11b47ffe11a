"""
Version information for Lotus XML Viewer
"""

__app_name__ = "Lotus XML Viewer"
__version__ = "1.0.0"
__build_date__ = "2026-10-19"
