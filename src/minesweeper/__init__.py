"""
Minesweeper engine and in-process game service.
"""
__version__ = "0.1.0"
