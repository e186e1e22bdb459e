"""
Provisioning report DTO.
"""

from dataclasses import dataclass, field
from typing import List

from huissier.domain.value_objects.call_result import CallResult


@dataclass
class ProvisioningReport:
    """
    Record of one provisioning pass.

    steps holds every attempted backend call in order; skipped steps
    are listed by name so drift is visible in logs.
    """

    public_key: str
    team: str
    steps: List[CallResult] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    identity_created: bool = False
    team_added: bool = False
    channels_created: List[str] = field(default_factory=list)

    def record(self, result: CallResult) -> CallResult:
        """Append a step result and return it."""
        self.steps.append(result)
        return result

    def skip(self, step: str) -> None:
        """Mark a step as not attempted."""
        self.skipped.append(step)

    @property
    def failed_steps(self) -> List[str]:
        """Names of steps whose backend call failed."""
        return [step.operation for step in self.steps if not step.ok]

    @property
    def complete(self) -> bool:
        """True if nothing failed and nothing was skipped."""
        return not self.failed_steps and not self.skipped
