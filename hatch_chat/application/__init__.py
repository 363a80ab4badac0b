"""
APPLICATION LAYER - use cases (commands and queries), ingress validation
and DTOs. Orchestrates domain services through repository ports.
"""
