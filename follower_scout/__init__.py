# follower_scout/__init__.py
"""
FollowerScout package initializer.
Defines the package version; the CLI lives in :mod:`follower_scout.cli`.
"""
__version__ = "0.1.0"
