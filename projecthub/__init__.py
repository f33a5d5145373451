"""
ProjectHub Service
Project and task tracking with per-user ownership
"""

__version__ = "1.0.0"
