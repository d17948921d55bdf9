"""Telling-joke skill for a social robot.

The robot tells a round of jokes, fidgets with its head, arms and LED,
and greets the people it recognizes.
"""

__version__ = "0.1.0"
