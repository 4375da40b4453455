"""
gerrit-cli: short aliases for the everyday Gerrit workflow.
"""

__version__ = "1.0.2"
