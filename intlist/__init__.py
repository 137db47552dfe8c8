from .iterator import (  # noqa: F401
    DONE,
    IntListIterator,
    IteratorDone,
    IteratorMisuse,
    parse,
)
from .parser import (  # noqa: F401
    INT_MAX,
    INT_MIN,
    InvalidSyntax,
    OutOfRange,
    ParseError,
)
