"""
Data Transfer Objects for application layer.
"""

from huissier.application.dto.provisioning_report import ProvisioningReport

__all__ = ["ProvisioningReport"]
