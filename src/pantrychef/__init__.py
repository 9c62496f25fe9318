"""Personal chef and nutrition tracker.

Derives daily calorie and macro targets from a body profile, splits them
across the meals of a day, and keeps track of pantry, meals and weight.
"""

__version__ = "0.1.0"
