"""Task deployment processes for a task-deployment supervisor."""

__version__ = "0.1.0"
