"""postdesk - server-rendered admin screen for creating, editing and deleting blog posts."""

__version__ = "0.1.0"
