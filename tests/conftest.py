import pytest

from seat_planner.models import LayoutConfig, Student


def make_student(hall_ticket, branch, name=None):
    return Student(
        name=name or f"Student {hall_ticket}",
        hall_ticket_number=hall_ticket,
        branch=branch,
        contact_number="9000000000",
    )


def make_layout(*rooms, block="A", floor=1):
    """rooms: (number, benches, students_per_bench) tuples, all on one floor."""
    return LayoutConfig.model_validate({
        "blocks": [{
            "name": block,
            "floors": [{
                "number": floor,
                "rooms": [
                    {"number": number, "benches": benches, "studentsPerBench": per_bench}
                    for number, benches, per_bench in rooms
                ],
            }],
        }],
        "startDate": "2025-06-01",
        "endDate": "2025-06-05",
        "examTimings": ["10:00 AM - 1:00 PM"],
    })


@pytest.fixture
def roster_csv():
    return (
        "Roll No,Student Name,Dept,Mobile\n"
        "21CS001,Asha Rao,CSE,9000000001\n"
        "21CS002,Bilal Khan,CSE,9000000002\n"
        "\n"
        "21EC001,Chitra N,ECE,9000000003\n"
        ",No Ticket,ECE,9000000004\n"
        "21ME001,,MECH,9000000005\n"
    )


@pytest.fixture
def layout_dict():
    return {
        "blocks": [
            {
                "name": "Main",
                "floors": [
                    {"number": 1, "rooms": [{"number": "101", "benches": 2, "studentsPerBench": 2}]},
                    {"number": 2, "rooms": [{"number": 201, "benches": 3, "studentsPerBench": 1}]},
                ],
            }
        ],
        "startDate": "2025-06-01",
        "endDate": "2025-06-05",
        "examTimings": ["10:00 AM - 1:00 PM", "2:00 PM - 5:00 PM"],
    }
