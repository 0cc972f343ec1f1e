"""
globscope: classify named glob groups and run a scoped ripgrep search.
"""

__version__ = "0.1.0"
