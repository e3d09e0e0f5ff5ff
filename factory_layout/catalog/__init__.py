"""Machine records — typed view and lenient parsing of catalog entries."""

from .models import MachineSpec, WORKING_AREA_TYPE
from .parsing import parse_machine, validate_machine, finite_number

__all__ = [
    # Models
    "MachineSpec", "WORKING_AREA_TYPE",
    # Parsing
    "parse_machine", "validate_machine", "finite_number",
]
