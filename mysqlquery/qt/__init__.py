"""
MySQL Query Tool PyQt6 GUI Module.
"""

from .main_window import MainWindow

__all__ = ["MainWindow"]
