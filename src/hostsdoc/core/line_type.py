from enum import Enum


class LineType(Enum):
    """
    Classification of a hosts-file line; drives rendering.
    """
    UNKNOWN = "unknown"    # content that is neither blank, comment nor address
    EMPTY = "empty"        # blank or whitespace-only
    COMMENT = "comment"    # line starts with '#'
    ADDRESS = "address"    # address followed by one or more hostnames
