"""Application layer: orchestrates domain services and external providers."""
