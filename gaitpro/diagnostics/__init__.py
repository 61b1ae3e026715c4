"""
Diagnostics for motion parametrizations.
"""

from .export import export_coefficients
from .jacobian_check import JacobianCheckReport, check_jacobian

__all__ = [
    "JacobianCheckReport",
    "check_jacobian",
    "export_coefficients",
]
