import logging
import re

from .config import HEADER_HINTS, HEADER_KEYWORDS
from .errors import ColumnResolutionError

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_header(header):
    """Lowercase and drop everything but ASCII letters and digits."""
    return _NON_ALNUM.sub("", str(header).lower())


def find_header_match(headers, keywords):
    """
    Return the original header that best matches one of the keywords.

    Keywords are tried in priority order; for each one the headers are scanned
    left to right and the first header whose normalized form contains the
    normalized keyword is returned. None when nothing matches.
    """
    normalized = [normalize_header(h) for h in headers]
    for keyword in keywords:
        needle = normalize_header(keyword)
        for index, candidate in enumerate(normalized):
            if needle in candidate:
                return headers[index]
    return None


def resolve_columns(headers, source = "file"):
    """Map each canonical field to the header that holds it, or raise for the first one missing."""
    resolved = {}
    for field, keywords in HEADER_KEYWORDS.items():
        match = find_header_match(headers, keywords)
        if match is None:
            label, holds, examples = HEADER_HINTS[field]
            spelled = ", ".join(f"'{e}'" for e in examples)
            raise ColumnResolutionError(
                field,
                f"Could not find a '{label}' column. Please ensure your {source} "
                f"has a column for {holds} (e.g., {spelled}).",
            )
        resolved[field] = match

    logger.debug("Resolved %s columns: %s", source, resolved)
    return resolved
