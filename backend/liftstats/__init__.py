"""
liftstats - training statistics and goal progress for strength training logs.
"""
__version__ = "1.0.0"
