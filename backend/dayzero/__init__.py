"""
Day Zero - habit tracking core: habits, logs, streaks, weekly progress and coach quota
"""
__version__ = "0.1.0"
