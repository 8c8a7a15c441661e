"""Building blocks for a simple lofi player: track lists, downloading, playback and a terminal interface."""

__version__ = "2.0.2"

__all__ = ["__version__"]