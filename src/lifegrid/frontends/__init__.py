"""Frontend interfaces for the universe."""

from .cli import CLILifeDriver

__all__ = ["CLILifeDriver"]
