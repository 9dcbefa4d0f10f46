"""
Home buyer financial calculators.
"""

__version__ = "0.1.0"
