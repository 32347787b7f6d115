"""
Pipeline Module

End-to-end registration from scanner reports to the fused map.
"""

from .registration import RegistrationResult, run_registration, run_registration_from_file

__all__ = [
    "RegistrationResult",
    "run_registration",
    "run_registration_from_file",
]
