"""
TomTom provider implementation.

This module provides access to TomTom Search API category and POI search,
plus the static lookup tables used to plan nearby searches.
"""

from .provider import TomTomProvider

__all__ = ['TomTomProvider']
