"""PostgREST operator and sort-order enums."""

from enum import Enum


class PostgrestOperator(str, Enum):
    """Prefix operators of the PostgREST query grammar (``column=op.value``)."""

    # Comparison
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    IS = "is"

    # Pattern matching
    LIKE = "like"
    ILIKE = "ilike"
    MATCH = "match"
    IMATCH = "imatch"

    # Full-text search
    FTS = "fts"
    PLFTS = "plfts"
    PHFTS = "phfts"
    WFTS = "wfts"

    # Arrays and ranges
    CS = "cs"
    CD = "cd"
    OV = "ov"
    SL = "sl"
    SR = "sr"
    NXR = "nxr"
    NXL = "nxl"
    ADJ = "adj"

    # Logical
    AND = "and"
    OR = "or"
    NOT = "not"


class SortOrder(str, Enum):
    """Sort direction of a listing."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def _missing_(cls, value: object) -> "SortOrder | None":
        if isinstance(value, str):
            upper = value.upper()
            for member in cls:
                if member.value == upper:
                    return member
        return None
