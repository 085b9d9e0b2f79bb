"""
Operator sets for concrete backends
"""
