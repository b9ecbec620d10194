"""
connect4 - Two-player Connect Four engine

This package provides a gravity-drop board with win and draw detection,
a turn-enforcing game engine on top of it, a Gymnasium environment
adapter, and a console interface for two human players.
"""

# Version number
__version__ = '0.1.0'
