"""
drapecalc — fabric requirement and cost estimator for made-to-measure
curtains and blinds.
"""

__version__ = "0.1.0"
