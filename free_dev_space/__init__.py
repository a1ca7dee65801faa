"""
free-dev-space — clean regenerable dev artifacts and reclaim disk space
"""

__version__ = "1.0.0"
