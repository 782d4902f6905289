import io
import logging
import re

import pandas as pd
import pdfplumber

from .config import CSV_MEDIA_TYPES, EXCEL_MEDIA_TYPES, PDF_MEDIA_TYPES, TEXT_MEDIA_TYPES
from .errors import EmptyRosterError, RosterParseError, SeatingError, UnsupportedFileTypeError
from .headers import resolve_columns
from .models import Student

logger = logging.getLogger(__name__)

# Two or more whitespace characters mark a column boundary in extracted text
COLUMN_GAP = re.compile(r"\s{2,}")

# PDF words whose tops differ by at most this many points share a line
LINE_TOLERANCE = 3
# a horizontal gap wider than this fraction of the text height separates columns
CELL_GAP_RATIO = 0.8


def _decode(content):
    return content.decode("utf-8-sig", errors = "replace")


def _make_student(name, hall_ticket_number, branch, contact_number):
    if not name or not hall_ticket_number:
        return None
    return Student(
        name = name,
        hall_ticket_number = hall_ticket_number,
        branch = branch or "",
        contact_number = contact_number or "",
    )


def _students_from_frame(df, source):
    df.columns = [str(c).strip() for c in df.columns]
    columns = resolve_columns(list(df.columns), source)

    students = []
    for _, row in df.iterrows():
        student = _make_student(
            name = row[columns["name"]],
            hall_ticket_number = row[columns["hall_ticket_number"]],
            branch = row[columns["branch"]],
            contact_number = row[columns["contact_number"]],
        )
        if student is not None:
            students.append(student)
    return students


def parse_students_from_csv(text):
    try:
        df = pd.read_csv(
            io.StringIO(text),
            # the python engine reports missing trailing cells as NA, not ""
            engine = "python",
            dtype = str,
            keep_default_na = False,
            skip_blank_lines = True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error("CSV parsing errors: %s", e)
        raise RosterParseError("Failed to parse CSV file. Please check the format.") from e

    # short rows come back with missing cells, long first rows as an implicit index
    if df.isna().to_numpy().any() or not isinstance(df.index, pd.RangeIndex):
        logger.error("CSV has rows whose field count does not match the header")
        raise RosterParseError("Failed to parse CSV file. Please check the format.")

    students = _students_from_frame(df, "CSV")
    logger.info("Parsed %d students from CSV (%d rows)", len(students), len(df))
    return students


def parse_students_from_excel(content):
    try:
        df = pd.read_excel(io.BytesIO(content), dtype = str, engine = "openpyxl")
    except Exception as e:
        raise RosterParseError(f"Excel read failed: {e}") from e

    df = df.fillna("")
    students = _students_from_frame(df, "spreadsheet")
    logger.info("Parsed %d students from spreadsheet (%d rows)", len(students), len(df))
    return students


def parse_students_from_text(text):
    lines = [line for line in text.split("\n") if line.strip() != ""]
    if len(lines) < 2:
        raise EmptyRosterError("PDF content is not in a valid table format.")

    headers = [h.strip() for h in COLUMN_GAP.split(lines[0].strip())]
    columns = resolve_columns(headers, "PDF")
    indices = {field: headers.index(header) for field, header in columns.items()}

    students = []
    for line in lines[1:]:
        parts = [p.strip() for p in COLUMN_GAP.split(line.strip())]
        if len(parts) < len(headers):
            continue
        student = _make_student(**{field: parts[i] for field, i in indices.items()})
        if student is not None:
            students.append(student)

    if not students:
        raise EmptyRosterError("Could not parse any students from the PDF. Please check the file's text format.")

    logger.info("Parsed %d students from %d text lines", len(students), len(lines) - 1)
    return students


def _page_lines(page):
    """
    Rebuild the text lines of a page from its words.

    Words on one line closer than about a character width belong to the same
    cell and are joined with one space; wider gaps are column boundaries and
    get two, so COLUMN_GAP can split them again.
    """
    words = sorted(page.extract_words(), key = lambda w: (round(w["top"]), w["x0"]))

    rows = []
    for word in words:
        if rows and abs(word["top"] - rows[-1][0]["top"]) <= LINE_TOLERANCE:
            rows[-1].append(word)
        else:
            rows.append([word])

    lines = []
    for row in rows:
        row.sort(key = lambda w: w["x0"])
        line = row[0]["text"]
        for prev, word in zip(row, row[1:]):
            height = word["bottom"] - word["top"]
            sep = "  " if word["x0"] - prev["x1"] > CELL_GAP_RATIO * height else " "
            line += sep + word["text"]
        lines.append(line)
    return lines


def extract_pdf_text(content):
    try:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            lines = [line for page in pdf.pages for line in _page_lines(page)]
    except Exception as e:
        raise RosterParseError(f"PDF read failed: {e}") from e
    return "\n".join(lines)


def parse_students_from_pdf(content):
    return parse_students_from_text(extract_pdf_text(content))


def read_roster_file(roster_file):
    """Pick a reader from the declared media type, falling back to PDF then CSV."""
    kind = roster_file.kind
    content = roster_file.content

    if kind in PDF_MEDIA_TYPES:
        return parse_students_from_pdf(content)
    if kind in CSV_MEDIA_TYPES:
        return parse_students_from_csv(_decode(content))
    if kind in TEXT_MEDIA_TYPES:
        return parse_students_from_text(_decode(content))
    if kind in EXCEL_MEDIA_TYPES:
        return parse_students_from_excel(content)

    logger.debug("Unknown media type %r for %s, guessing format", kind, roster_file.filename)
    try:
        return parse_students_from_pdf(content)
    except SeatingError as pdf_error:
        logger.debug("Not a PDF roster: %s", pdf_error)
    try:
        return parse_students_from_csv(_decode(content))
    except SeatingError as csv_error:
        logger.debug("Not a CSV roster: %s", csv_error)
        raise UnsupportedFileTypeError("Unsupported file type. Please upload a valid CSV or PDF file.") from csv_error


def merge_rosters(files):
    """
    Read every roster file in order and concatenate the students.

    The first file that fails aborts the whole batch, even if earlier files
    were read successfully.
    """
    all_students = []
    for roster_file in files:
        students = read_roster_file(roster_file)
        logger.info("Read %d students from %s", len(students), roster_file.filename or roster_file.kind or "upload")
        all_students.extend(students)

    if not all_students:
        raise EmptyRosterError(
            "Could not extract any student data from the uploaded files. "
            "Please ensure files are correctly formatted and not empty."
        )
    return all_students
