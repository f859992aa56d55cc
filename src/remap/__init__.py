"""Range remapping engine.

This module maps values and whole ranges through piecewise-offset stages.
It composes stages into pipelines for point and range evaluation.
"""
