"""Application layer for motionflow.

Ports, services and DTOs that sit between the domain procedure and
whatever drives it.
"""
