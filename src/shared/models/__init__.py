"""
Models package — graph data classes.
"""

from .graph import Edge, Graph, Node, Position

__all__ = ["Edge", "Graph", "Node", "Position"]
