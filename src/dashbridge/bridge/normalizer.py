"""Int64 field normalization for manager results.

The backend reports run timestamps as 64-bit values which the browser
cannot hold natively, so they are converted to plain integers before
the result leaves the server.
"""

from __future__ import annotations

import math
import re
from typing import Any

from dashbridge.domain.models import INT64_FIELDS, ResultShape, classify_result

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_int(text: str) -> int | float:
    """Best-effort base-10 parse of the leading integer in ``text``.

    Leading whitespace and an optional sign are accepted and anything
    after the digits is ignored. Returns ``nan`` when no digits are found
    rather than raising, so one bad field never fails a whole response.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return math.nan
    return int(match.group(1))


def normalize_int64_fields(result: Any) -> Any:
    """Replace Int64 fields in a sequence of records with parsed integers.

    Records are modified in place and ``result`` itself is returned.
    Elements that are not records are skipped. Empty sequences, single
    records and scalars pass through untouched.
    """
    if classify_result(result) is not ResultShape.RECORD_SEQUENCE:
        return result
    for record in result:
        if not isinstance(record, dict):
            continue
        for field in INT64_FIELDS.intersection(record):
            record[field] = parse_int(str(record[field]))
    return result
