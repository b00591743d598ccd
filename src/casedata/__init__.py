from .errors import CaseDataError, DataLoadError, InvalidParameterError, MalformedDateError, MalformedValueError
from .io import fetch_csv, read_rows
from .parsing import parse_date, parse_rows
from .records import DailyRecord, ParseReport, ParseResult

__all__ = [
    "CaseDataError",
    "DailyRecord",
    "DataLoadError",
    "InvalidParameterError",
    "MalformedDateError",
    "MalformedValueError",
    "ParseReport",
    "ParseResult",
    "fetch_csv",
    "parse_date",
    "parse_rows",
    "read_rows",
]
