from .config import Config, cfg
from .errors import InfeasibleTargetsError, RotaError, ValidationError
from .generator import check_attendance, generate_schedule
from .input_data import InputData, build_input
from .main import run_scheduler

__all__ = [
    "Config",
    "cfg",
    "InputData",
    "build_input",
    "generate_schedule",
    "check_attendance",
    "run_scheduler",
    "RotaError",
    "ValidationError",
    "InfeasibleTargetsError",
]
