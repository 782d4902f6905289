"""
Configuration for the seat planner.
Holds the allocation constants, header keywords and media types, plus a
small JSON loader for overriding the runtime settings.
"""

import json
import logging

logger = logging.getLogger(__name__)

# Hard ceiling on benches used per room, whatever the layout declares
MAX_BENCHES_PER_ROOM = 45

# Keyword lists are tried in order; first hit wins
HEADER_KEYWORDS = {
    "name": ["name", "studentname", "fullname", "nameofstudent"],
    "hall_ticket_number": ["hallticketnumber", "hallticket", "ticketnumber", "htno", "rollno", "roll number"],
    "branch": ["branch", "department", "stream", "dept"],
    "contact_number": ["contactnumber", "phone", "phonenumber", "mobile", "contact no"],
}

# label shown in errors, what the column holds, example spellings
HEADER_HINTS = {
    "name": ("Name", "student names", ["Name", "FullName"]),
    "hall_ticket_number": ("Hall Ticket Number", "hall tickets", ["HallTicket", "Roll No"]),
    "branch": ("Branch", "student branch", ["Branch", "Department"]),
    "contact_number": ("Contact Number", "contact info", ["Phone", "ContactNumber"]),
}

PDF_MEDIA_TYPES = {"application/pdf"}
CSV_MEDIA_TYPES = {"text/csv", "application/vnd.ms-excel"}
TEXT_MEDIA_TYPES = {"text/plain"}
EXCEL_MEDIA_TYPES = {"application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"}

DEFAULTS = {
    "max_benches_per_room": MAX_BENCHES_PER_ROOM,
    "log_level": "INFO",
    "log_format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
}


def load_config(path=None):
    """Return the default settings, overlaid with values from a JSON file if given."""
    settings = dict(DEFAULTS)
    if path is None:
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return settings

    unknown = set(overrides) - set(DEFAULTS)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", sorted(unknown))

    for key in DEFAULTS:
        if key in overrides:
            settings[key] = overrides[key]

    settings["max_benches_per_room"] = int(settings["max_benches_per_room"])
    return settings
