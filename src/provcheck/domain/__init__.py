"""Domain layer: pure types and logic with no I/O.

Domain modules never import from services, infrastructure, commands,
or output.
"""
