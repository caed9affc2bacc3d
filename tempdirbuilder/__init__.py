"""Create a temporary directory pre-populated with files and directories."""

__version__ = "0.1.0"
__all__ = ["builder"]