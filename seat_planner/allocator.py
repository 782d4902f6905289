import logging
import random

from .config import MAX_BENCHES_PER_ROOM
from .layouts import bench_label, iter_rooms, room_capacity, total_capacity
from .models import SeatingAssignment

logger = logging.getLogger(__name__)


def partition_by_branch(students):
    groups = {}
    for student in students:
        groups.setdefault(student.branch, []).append(student)
    return groups


def shuffle_by_branch(students, rng = None):
    """
    Shuffle students within each branch and shuffle the branch order.

    Students of one branch stay contiguous in the result; mixing branches
    on a bench is left to the allocator.
    """
    rng = rng or random
    groups = partition_by_branch(students)
    for group in groups.values():
        rng.shuffle(group)

    branches = list(groups)
    rng.shuffle(branches)
    return [student for branch in branches for student in groups[branch]]


class StudentPool:
    """
    Students waiting for a seat, in pool order.

    The order is fixed at construction. Seating a student marks its index as
    taken and moves the front cursor past taken entries, so nothing is
    shifted or spliced.
    """

    def __init__(self, students):
        self._students = tuple(students)
        self._taken = [False] * len(self._students)
        self._front = 0
        self._remaining = len(self._students)

    def __len__(self):
        return self._remaining

    def _take(self, index):
        self._taken[index] = True
        self._remaining -= 1
        while self._front < len(self._students) and self._taken[self._front]:
            self._front += 1
        return self._students[index]

    def pop_front(self):
        if not self._remaining:
            raise IndexError("pop from an empty pool")
        return self._take(self._front)

    def pop_pair(self):
        """
        Remove the front student and a bench partner.

        The partner is the first remaining student from another branch, or the
        second remaining student when everyone left shares the front's branch.
        """
        if self._remaining < 2:
            raise IndexError("pool needs two students to fill a bench")

        first_index = self._front
        first = self._students[first_index]
        second_index = None
        partner_index = None
        for index in range(first_index + 1, len(self._students)):
            if self._taken[index]:
                continue
            if second_index is None:
                second_index = index
            if self._students[index].branch != first.branch:
                partner_index = index
                break

        if partner_index is None:
            partner_index = second_index

        partner = self._take(partner_index)
        self._take(first_index)
        return first, partner


def _seat(student, block, floor, room, bench_number):
    return SeatingAssignment(
        **student.model_dump(),
        block = block.name,
        floor = str(floor.number),
        classroom = room.number,
        bench_number = bench_number,
    )


def _fill_room(pool, block, floor, room, seats_left, max_benches):
    allocation = []
    capacity = min(room_capacity(room, max_benches), seats_left)
    bench = 1

    while len(allocation) < capacity and len(pool) > 0:
        if room.students_per_bench == 1:
            allocation.append(_seat(pool.pop_front(), block, floor, room, bench_label(bench)))
            bench += 1
        elif len(pool) < 2:
            allocation.append(_seat(pool.pop_front(), block, floor, room, bench_label(bench, "L")))
            bench += 1
            break
        else:
            left, right = pool.pop_pair()
            allocation.append(_seat(left, block, floor, room, bench_label(bench, "L")))
            allocation.append(_seat(right, block, floor, room, bench_label(bench, "R")))
            bench += 1

    return allocation


def allocate_seats(pool, layout, max_benches = MAX_BENCHES_PER_ROOM):
    """
    Seat students from the pool room by room, in layout order.

    Returns the assignments sorted by hall ticket number (ordinal order).
    Students left in the pool once every seat is taken stay unassigned.
    """
    ceiling = total_capacity(layout, max_benches)
    allocation = []

    for block, floor, room in iter_rooms(layout):
        if len(allocation) >= ceiling or len(pool) == 0:
            break

        seated = _fill_room(pool, block, floor, room, ceiling - len(allocation), max_benches)
        logger.debug(
            "Room %s (block %s, floor %s): %d seated",
            room.number, block.name, floor.number, len(seated),
        )
        allocation.extend(seated)

    if len(pool) > 0:
        logger.warning("%d students could not be seated: layout holds %d", len(pool), ceiling)

    allocation.sort(key = lambda a: a.hall_ticket_number)
    return allocation
