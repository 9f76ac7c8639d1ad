"""
Logdog - install a structured JSON logger into a project and browse its logs.
"""

__version__ = "1.0.0"
