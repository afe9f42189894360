"""
Git tool server: exposes a fixed catalog of git operations as callable tools.
"""

__version__ = "1.0.0"
