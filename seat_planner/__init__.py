from .models import (
    Block,
    ExamConfig,
    Floor,
    LayoutConfig,
    Room,
    RosterFile,
    SeatingAssignment,
    SeatingFailure,
    SeatingPlan,
    Student,
)
from .errors import (
    ColumnResolutionError,
    EmptyRosterError,
    RosterParseError,
    SeatingError,
    UnsupportedFileTypeError,
)
from .planner import generate_seating_plan

__version__ = "0.1.0"
