import logging

from .allocator import StudentPool, allocate_seats, shuffle_by_branch
from .config import MAX_BENCHES_PER_ROOM
from .errors import SeatingError
from .layouts import capacity_check
from .models import ExamConfig, LayoutConfig, RosterFile, SeatingFailure, SeatingPlan
from .student_import import merge_rosters
from .summary import summarize_rooms

logger = logging.getLogger(__name__)


def _as_roster_file(item):
    if isinstance(item, RosterFile):
        return item
    if isinstance(item, str):
        return RosterFile.from_data_uri(item)
    content, media_type = item
    return RosterFile(content = content, media_type = media_type)


def generate_seating_plan(files, layout, rng = None, max_benches = None):
    """
    Build a seating plan from roster files and a venue layout.

    files: RosterFile objects, data URIs, or (bytes, media type) pairs.
    layout: LayoutConfig or a mapping that validates as one.
    rng: object with a shuffle() method; the random module when omitted.

    Returns a SeatingPlan, or a SeatingFailure carrying the message of the
    first roster error. An invalid layout raises pydantic's ValidationError.
    """
    if not isinstance(layout, LayoutConfig):
        layout = LayoutConfig.model_validate(layout)
    if max_benches is None:
        max_benches = MAX_BENCHES_PER_ROOM

    try:
        students = merge_rosters([_as_roster_file(f) for f in files])
    except SeatingError as e:
        logger.error("Seating plan aborted: %s", e)
        return SeatingFailure(error = str(e))

    check = capacity_check(layout, len(students), max_benches)
    if check["shortage_students"]:
        logger.warning(
            "Total students (%d) exceed seat capacity (%d); %d more benches needed",
            check["total_students"], check["total_seats"], check["additional_benches_needed"],
        )

    pool = StudentPool(shuffle_by_branch(students, rng))
    seating_plan = allocate_seats(pool, layout, max_benches)
    logger.info("Seated %d of %d students", len(seating_plan), len(students))

    return SeatingPlan(
        seating_plan = seating_plan,
        exam_config = ExamConfig(
            start_date = layout.start_date,
            end_date = layout.end_date,
            exam_timings = layout.exam_timings,
            use_same_plan = True,
        ),
        room_branch_summary = summarize_rooms(seating_plan),
        all_students = students,
    )
