"""Send messages to remote A2A agents and render their replies."""

__version__ = "0.1.0"
