"""Launch configured items through dmenu-style menus or the terminal."""

__version__ = "0.1.0"
