"""
NewsLive - News Reader Client

Fetches news articles from a NewsAPI-compatible service, caches them locally,
keeps track of favorite articles and builds personalized recommendations from
stored reading preferences.
"""

__version__ = "0.1.0"
