"""
SearchCommand - Microsoft Teams bot for NuGet package search.
"""
__version__ = "1.0.0"
