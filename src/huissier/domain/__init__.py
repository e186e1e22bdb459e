"""
Domain layer for Huissier.
"""
