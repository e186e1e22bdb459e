"""
Infrastructure adapters for Huissier.
"""
