"""
ScriptMaster - script model and export engine for structured lesson scripts.
"""

__version__ = "1.0.0"
