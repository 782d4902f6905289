class SeatingError(Exception):
    """Base class for failures that abort a seating batch."""


class ColumnResolutionError(SeatingError):
    def __init__(self, field, message):
        super().__init__(message)
        self.field = field


class UnsupportedFileTypeError(SeatingError):
    pass


class EmptyRosterError(SeatingError):
    pass


class RosterParseError(SeatingError):
    pass
