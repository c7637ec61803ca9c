"""A grid raycaster that renders .cub scene files as a first-person maze."""

__version__ = "0.1.0"
__all__ = ["__version__"]