from math import ceil

from .config import MAX_BENCHES_PER_ROOM


def effective_benches(room, max_benches = MAX_BENCHES_PER_ROOM):
    return min(room.benches, max_benches)


def room_capacity(room, max_benches = MAX_BENCHES_PER_ROOM):
    return effective_benches(room, max_benches) * room.students_per_bench


def iter_rooms(layout):
    """Yield (block, floor, room) in traversal order."""
    for block in layout.blocks:
        for floor in block.floors:
            for room in floor.rooms:
                yield block, floor, room


def total_capacity(layout, max_benches = MAX_BENCHES_PER_ROOM):
    return sum(room_capacity(room, max_benches) for _, _, room in iter_rooms(layout))


def bench_label(bench, side = None):
    return f"{bench}{side}" if side else str(bench)


def capacity_check(layout, total_students, max_benches = MAX_BENCHES_PER_ROOM):
    total_benches = sum(effective_benches(room, max_benches) for _, _, room in iter_rooms(layout))
    total_seats = total_capacity(layout, max_benches)

    shortage = max(0, total_students - total_seats)
    # price extra benches at the widest bench in the layout
    seats_per_bench = max((room.students_per_bench for _, _, room in iter_rooms(layout)), default = 1)
    benches_needed = ceil(shortage / seats_per_bench) if shortage > 0 else 0

    return {
        "total_students": total_students,
        "total_benches": total_benches,
        "total_seats": total_seats,
        "shortage_students": shortage,
        "additional_benches_needed": benches_needed,
    }
