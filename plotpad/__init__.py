"""
PlotPad - CSV sheets with encryption at rest and model-suggested charts.
"""

__version__ = '0.1.0'
