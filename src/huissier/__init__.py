"""
Huissier - realm member authentication and chat provisioning.
"""

__version__ = "0.1.0"
