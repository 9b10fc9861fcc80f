"""Utility modules for depnav."""
