"""Launcher frontend core: notifications, ROM patching, playlists, core options and the menu model."""

__version__ = "0.1.0"