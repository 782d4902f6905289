import argparse
import json
import logging
import mimetypes
import random
import sys
from pathlib import Path

from .config import load_config
from .models import RosterFile, SeatingAssignment, SeatingFailure, Student
from .planner import generate_seating_plan
from .summary import find_absentees, group_by_room, lookup_seat

logger = logging.getLogger("seat_planner")

XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _guess_media_type(path):
    if path.suffix.lower() == ".xlsx":
        return XLSX_TYPE
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or ""


def _load_plan(path):
    with open(path, "r", encoding = "utf-8") as f:
        data = json.load(f)
    plan = [SeatingAssignment.model_validate(a) for a in data.get("seatingPlan", [])]
    students = [Student.model_validate(s) for s in data.get("allStudents", [])]
    return plan, students


def cmd_plan(args, settings):
    with open(args.layout, "r", encoding = "utf-8") as f:
        layout = json.load(f)

    files = []
    for name in args.files:
        path = Path(name)
        files.append(RosterFile(content = path.read_bytes(), media_type = _guess_media_type(path), filename = path.name))

    logger.info("Loaded %d roster files", len(files))

    rng = random.Random(args.seed) if args.seed is not None else None
    max_benches = args.max_benches or settings["max_benches_per_room"]
    result = generate_seating_plan(files, layout, rng = rng, max_benches = max_benches)

    payload = json.dumps(result.to_dict(), indent = 2)
    if args.output:
        Path(args.output).write_text(payload, encoding = "utf-8")
    else:
        print(payload)

    if isinstance(result, SeatingFailure):
        print(f"Error: {result.error}", file = sys.stderr)
        return 1

    print("\n--- Seat Allocation ---", file = sys.stderr)
    for room, seats in group_by_room(result.seating_plan).items():
        counts = ", ".join(f"{b}: {n}" for b, n in result.room_branch_summary[room].items())
        print(f"Room {room} | {len(seats)} students | {counts}", file = sys.stderr)
    print(f"Seated {len(result.seating_plan)} of {len(result.all_students)} students", file = sys.stderr)
    return 0


def cmd_lookup(args, settings):
    plan, _ = _load_plan(args.plan)
    seat = lookup_seat(plan, args.hall_ticket)
    if seat is None:
        print("Hall ticket number not found in the seating plan.", file = sys.stderr)
        return 1

    print(
        f"{seat.name} ({seat.hall_ticket_number}) -> Block {seat.block} | Floor {seat.floor} "
        f"| Room {seat.classroom} | Bench {seat.bench_number}"
    )
    return 0


def cmd_absentees(args, settings):
    plan, students = _load_plan(args.plan)
    for branch, tickets in find_absentees(students, plan).items():
        print(f"{branch} Absentees Roll Numbers: {', '.join(tickets) if tickets else '-'}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog = "seat-planner", description = "Exam seating plan generator")
    parser.add_argument("--config", help = "JSON file overriding the default settings")
    sub = parser.add_subparsers(dest = "command", required = True)

    plan = sub.add_parser("plan", help = "Generate a seating plan from roster files")
    plan.add_argument("files", nargs = "+", help = "Roster files (CSV, PDF, XLSX or text)")
    plan.add_argument("--layout", required = True, help = "Layout JSON (blocks, dates, exam timings)")
    plan.add_argument("--output", help = "Where to write the plan JSON; stdout when omitted")
    plan.add_argument("--seed", type = int, help = "Seed the shuffle for a reproducible plan")
    plan.add_argument("--max-benches", type = int, help = "Override the per-room bench ceiling")
    plan.set_defaults(handler = cmd_plan)

    lookup = sub.add_parser("lookup", help = "Find a student's seat in a saved plan")
    lookup.add_argument("plan")
    lookup.add_argument("hall_ticket")
    lookup.set_defaults(handler = cmd_lookup)

    absentees = sub.add_parser("absentees", help = "List unseated students per branch")
    absentees.add_argument("plan")
    absentees.set_defaults(handler = cmd_absentees)

    return parser


def main(argv = None):
    args = build_parser().parse_args(argv)
    settings = load_config(args.config)
    logging.basicConfig(level = settings["log_level"], format = settings["log_format"])
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
