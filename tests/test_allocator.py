import random
from collections import Counter

import pytest

from conftest import make_layout, make_student
from seat_planner.allocator import (
    StudentPool,
    allocate_seats,
    partition_by_branch,
    shuffle_by_branch,
)
from seat_planner.layouts import room_capacity


def _roster(counts):
    """counts: {branch: n} -> students with tickets like CSE-003."""
    return [
        make_student(f"{branch}-{i:03d}", branch)
        for branch, n in counts.items()
        for i in range(1, n + 1)
    ]


def _seat_key(a):
    return (a.block, a.floor, a.classroom, a.bench_number)


def test_partition_groups_by_exact_branch():
    students = [make_student("1", "CSE"), make_student("2", "cse"), make_student("3", "CSE")]
    groups = partition_by_branch(students)

    assert list(groups) == ["CSE", "cse"]
    assert [s.hall_ticket_number for s in groups["CSE"]] == ["1", "3"]


def test_shuffle_keeps_branches_contiguous():
    students = _roster({"CSE": 6, "ECE": 4, "MECH": 5})
    pool = shuffle_by_branch(students, random.Random(7))

    assert sorted(s.hall_ticket_number for s in pool) == sorted(s.hall_ticket_number for s in students)
    runs = [b for i, b in enumerate(s.branch for s in pool) if i == 0 or pool[i - 1].branch != b]
    assert sorted(runs) == ["CSE", "ECE", "MECH"]


def test_shuffle_is_reproducible_with_a_seeded_rng():
    students = _roster({"CSE": 5, "ECE": 5})
    first = shuffle_by_branch(students, random.Random(42))
    second = shuffle_by_branch(students, random.Random(42))
    assert [s.hall_ticket_number for s in first] == [s.hall_ticket_number for s in second]


def test_pool_pairs_front_with_first_other_branch():
    pool = StudentPool([
        make_student("a1", "A"), make_student("a2", "A"), make_student("b1", "B"), make_student("a3", "A"),
    ])

    left, right = pool.pop_pair()
    assert (left.hall_ticket_number, right.hall_ticket_number) == ("a1", "b1")

    # only A left: fall back to the next student in line
    left, right = pool.pop_pair()
    assert (left.hall_ticket_number, right.hall_ticket_number) == ("a2", "a3")
    assert len(pool) == 0


def test_pool_front_skips_removed_students():
    pool = StudentPool([make_student("a1", "A"), make_student("b1", "B"), make_student("b2", "B")])
    pool.pop_pair()
    assert pool.pop_front().hall_ticket_number == "b2"
    with pytest.raises(IndexError):
        pool.pop_front()


def test_two_a_one_b_in_two_bench_room():
    students = [make_student("A1", "A"), make_student("A2", "A"), make_student("B1", "B")]
    layout = make_layout(("101", 2, 2))

    for seed in range(10):
        pool = StudentPool(shuffle_by_branch(students, random.Random(seed)))
        plan = allocate_seats(pool, layout)
        by_bench = {a.bench_number: a for a in plan}

        assert len(plan) == 3
        assert set(by_bench) == {"1L", "1R", "2L"}
        assert {by_bench["1L"].branch, by_bench["1R"].branch} == {"A", "B"}
        assert by_bench["2L"].branch == "A"


def test_overflow_seats_only_capacity():
    students = _roster({"A": 3, "B": 2})
    layout = make_layout(("101", 2, 2))

    plan = allocate_seats(StudentPool(shuffle_by_branch(students, random.Random(1))), layout)

    assert len(plan) == 4
    assert len({a.hall_ticket_number for a in plan}) == 4


def test_single_seat_benches_are_numbered_per_room():
    students = _roster({"A": 5})
    layout = make_layout(("101", 3, 1), ("102", 3, 1))

    plan = allocate_seats(StudentPool(students), layout)
    seats = sorted((a.classroom, a.bench_number) for a in plan)

    assert seats == [("101", "1"), ("101", "2"), ("101", "3"), ("102", "1"), ("102", "2")]


def test_leftover_student_takes_left_seat_and_later_rooms_stay_empty():
    students = _roster({"A": 2, "B": 1})
    layout = make_layout(("101", 1, 2), ("102", 1, 2), ("103", 4, 1))

    plan = allocate_seats(StudentPool(students), layout)

    assert sorted((a.classroom, a.bench_number) for a in plan) == [("101", "1L"), ("101", "1R"), ("102", "1L")]


def test_bench_ceiling_caps_large_rooms():
    students = _roster({"A": 60})
    layout = make_layout(("Hall", 50, 1))

    assert len(allocate_seats(StudentPool(students), layout)) == 45
    assert len(allocate_seats(StudentPool(students), layout, max_benches=50)) == 50


def test_mixed_branches_never_share_a_bench_when_avoidable():
    students = _roster({"A": 10, "B": 10})
    layout = make_layout(("101", 5, 2), ("102", 5, 2))

    plan = allocate_seats(StudentPool(shuffle_by_branch(students, random.Random(3))), layout)
    benches = {}
    for a in plan:
        benches.setdefault((a.classroom, a.bench_index), []).append(a.branch)

    assert len(plan) == 20
    assert all(len(set(pair)) == 2 for pair in benches.values())


@pytest.mark.parametrize("seed", range(5))
def test_everyone_seated_once_within_room_limits(seed):
    rng = random.Random(seed)
    students = _roster({"CSE": rng.randint(1, 30), "ECE": rng.randint(1, 20), "IT": rng.randint(0, 10)})
    layout = make_layout(("101", 10, 2), ("102", 7, 1), ("103", 50, 2))

    plan = allocate_seats(StudentPool(shuffle_by_branch(students, rng)), layout)

    assert Counter(a.hall_ticket_number for a in plan) == Counter(s.hall_ticket_number for s in students)
    assert len({_seat_key(a) for a in plan}) == len(plan)
    per_room = Counter(a.classroom for a in plan)
    for block in layout.blocks:
        for floor in block.floors:
            for room in floor.rooms:
                assert per_room[room.number] <= room_capacity(room)


def test_plan_is_sorted_by_hall_ticket_ordinal():
    students = [make_student(t, "A") for t in ("b2", "B10", "B2", "a1")]
    plan = allocate_seats(StudentPool(students), make_layout(("101", 4, 1)))

    assert [a.hall_ticket_number for a in plan] == ["B10", "B2", "a1", "b2"]


def test_assignment_carries_location():
    layout = make_layout(("101", 1, 1), block="North", floor=3)
    (seat,) = allocate_seats(StudentPool([make_student("X1", "A")]), layout)

    assert (seat.block, seat.floor, seat.classroom, seat.bench_number) == ("North", "3", "101", "1")
