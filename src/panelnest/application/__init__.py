"""Application layer - job files and their adaptation to the domain."""
