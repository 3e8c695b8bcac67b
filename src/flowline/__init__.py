"""
Flowline: minimal flow-based processing pipelines.

Nodes exchange messages over directional ports, forming a directed graph
through which data is transformed step by step.
"""

__version__ = "0.1.0"
