import base64
from datetime import date
from typing import Dict, List, Optional
from urllib.parse import unquote_to_bytes

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .errors import RosterParseError


class SeatingModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator = to_camel, populate_by_name = True)

    def to_dict(self):
        return self.model_dump(by_alias = True)


class Student(SeatingModel):
    name: str = Field(min_length = 1)
    hall_ticket_number: str = Field(min_length = 1)
    branch: str = ""
    contact_number: str = ""


class SeatingAssignment(Student):
    block: str
    floor: str
    classroom: str
    bench_number: str

    @property
    def bench_index(self):
        return int(self.bench_number.rstrip("LR"))

    @property
    def side(self):
        return self.bench_number[-1] if self.bench_number[-1] in "LR" else ""


class Room(SeatingModel):
    number: str = Field(min_length = 1)
    benches: int = Field(ge = 1)
    students_per_bench: int = Field(default = 2, ge = 1, le = 2)

    @field_validator("number", mode = "before")
    @classmethod
    def number_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value


class Floor(SeatingModel):
    number: int
    rooms: List[Room] = Field(min_length = 1)


class Block(SeatingModel):
    name: str = Field(min_length = 1)
    floors: List[Floor] = Field(min_length = 1)


class LayoutConfig(SeatingModel):
    blocks: List[Block] = Field(min_length = 1)
    start_date: str
    end_date: str
    exam_timings: List[str] = Field(default_factory = list)

    @field_validator("start_date", "end_date", mode = "before")
    @classmethod
    def date_as_text(cls, value):
        if isinstance(value, date):
            return value.strftime("%Y-%m-%d")
        return value


class ExamConfig(SeatingModel):
    start_date: str
    end_date: str
    exam_timings: List[str]
    use_same_plan: bool = True


class RosterFile(SeatingModel):
    """Raw bytes of one uploaded roster plus the media type the uploader declared."""

    content: bytes
    media_type: str = ""
    filename: Optional[str] = None

    @classmethod
    def from_data_uri(cls, uri, filename = None):
        header, sep, payload = uri.partition(",")
        if not sep or not header.startswith("data:"):
            raise RosterParseError("The uploaded file is not a valid data URI.")

        params = header[len("data:"):].split(";")
        media_type = params[0].strip().lower()
        if "base64" in params[1:]:
            try:
                content = base64.b64decode(payload)
            except ValueError as e:
                raise RosterParseError(f"Could not decode the uploaded file: {e}") from e
        else:
            content = unquote_to_bytes(payload)
        return cls(content = content, media_type = media_type, filename = filename)

    @property
    def kind(self):
        return self.media_type.split(";")[0].strip().lower()


class SeatingPlan(SeatingModel):
    seating_plan: List[SeatingAssignment]
    exam_config: ExamConfig
    room_branch_summary: Dict[str, Dict[str, int]]
    all_students: List[Student]


class SeatingFailure(SeatingModel):
    error: str
