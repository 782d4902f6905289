def summarize_rooms(plan):
    """Count seated students per classroom and branch."""
    summary = {}
    for assignment in plan:
        branches = summary.setdefault(assignment.classroom, {})
        branches[assignment.branch] = branches.get(assignment.branch, 0) + 1
    return summary


def lookup_seat(plan, hall_ticket_number):
    wanted = hall_ticket_number.strip().lower()
    for assignment in plan:
        if assignment.hall_ticket_number.lower() == wanted:
            return assignment
    return None


def find_absentees(all_students, plan):
    """
    Hall tickets of roster students missing from the plan, per branch.

    Every branch on the roster gets an entry, in order of first appearance,
    even when all of its students were seated.
    """
    seated = {a.hall_ticket_number for a in plan}
    absentees = {}
    for student in all_students:
        missing = absentees.setdefault(student.branch, [])
        if student.hall_ticket_number not in seated:
            missing.append(student.hall_ticket_number)
    return absentees


def group_by_room(plan):
    rooms = {}
    for assignment in plan:
        rooms.setdefault(assignment.classroom, []).append(assignment)
    for seats in rooms.values():
        seats.sort(key = lambda a: (a.bench_index, a.side))
    return rooms
