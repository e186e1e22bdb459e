"""
Presentation layer (HTTP API).
"""
