"""License analysis logic for license-gate."""
from license_gate.analysis.policy import evaluate_package, is_self_package

__all__ = [
    "evaluate_package",
    "is_self_package",
]
