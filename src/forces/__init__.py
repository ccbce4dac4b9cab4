"""Scrape Codeforces contests into a local training workspace."""

__version__ = "0.1.0"
