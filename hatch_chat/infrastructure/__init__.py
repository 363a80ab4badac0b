"""
INFRASTRUCTURE LAYER - Implementations of domain ports.
"""
