"""
Infrastructure dependency cascade engine.

Builds a weighted dependency graph over submarine cables, pipelines, ports
and maritime chokepoints, and computes the blast radius of a disruption at
any single node.
"""

__version__ = "0.1.0"
