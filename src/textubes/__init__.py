"""
Textubes: compose small text transformations into a live dataflow graph.

Nodes are instances of registered transform kinds; edges carry text from one
node's output channel to another node's input port. Every mutation runs a
propagation pass that keeps each node's cached outputs consistent with its
current inputs and parameters.
"""

__version__ = "0.4.0"
