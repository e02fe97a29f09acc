"""slashbot -- a slash-command bot template for Discord."""

__version__ = "0.1.0"
