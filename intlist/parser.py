import re
from dataclasses import dataclass
from typing import List, Optional, Union

# Integers are limited to a signed 64 bit machine word.
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

ITEM_SEPARATOR = ","
RANGE_SEPARATOR = "..."

INTEGER_REGEX = re.compile(r"[+-]?[0-9]+")


class ParseError(ValueError):
    """
    The specification is not a valid list of integers.

    Never raised by the iterator construction itself, but stored as its error, see
    IntListIterator.err.
    """

    def __init__(
        self,
        pos: int,
        expected: Union[str, List[str]],
        source: str,
        got: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.pos = pos
        self.expected = expected
        self.source = source
        self.got = got
        self.reason = reason

    def expected_str(self) -> str:
        if isinstance(self.expected, str):
            return self.expected
        else:
            num_vals = len(self.expected)
            if num_vals == 0:
                return "{unknown}"
            elif num_vals == 1:
                return self.expected[0]
            else:
                return f'{", ".join(self.expected[:-1])} or {self.expected[-1]}'

    def __str__(self) -> str:
        msg = f"Expected {self.expected_str()} "
        if self.reason:
            msg += f"for {self.reason} "
        msg += f"at position {self.pos} "
        if self.got:
            msg += f"- got `{self.got}` "
        msg += f"in: {repr(self.source)}"
        return msg


class InvalidSyntax(ParseError):
    """
    Malformed integer or range, an item with more than one range separator or an empty
    item.
    """


class OutOfRange(ParseError):
    """
    A well-formed integer that does not fit between INT_MIN and INT_MAX.
    """


@dataclass
class Seq:
    """
    An inclusive run of consecutive integers, which is consumed from the front.
    A single integer is a run where next == last.
    """

    # Next value to emit
    next: int
    # Last value of the run
    last: int
    # Direction, +1 for increasing and -1 for decreasing
    step: int

    @classmethod
    def single(cls, value: int) -> "Seq":
        # The step is never used, since the run is exhausted after the first value.
        return cls(next=value, last=value, step=-1)

    @classmethod
    def between(cls, first: int, last: int) -> "Seq":
        # Equal endpoints are treated as decreasing, which makes no difference for
        # a run of a single value.
        return cls(next=first, last=last, step=1 if first < last else -1)


class IntListParser:
    """
    A parser for a list of integers and inclusive ranges of integers.
    Ranges can be increasing or decreasing, both endpoints are included.

    Grammar (EBNF-like):
        spec = "" | item, { ",", item }
        item = integer | integer, "...", integer
        integer = [ "+" | "-" ], digit, { digit }
        digit = "0" | "1" | "2" | "3" | "4" | "5" | "6" | "7" | "8" | "9" ;

    Note: Whitespace is not allowed anywhere, not even around the separators.

    Example:
        "" => []
        "4,6,10...13" => [4, 6, 10, 11, 12, 13]
        "4,12...8,-3" => [4, 12, 11, 10, 9, 8, -3]
    """

    def __init__(self, string: str):
        self.string = string
        self.pos = 0

    def parse_integer(self, text: str, pos: int, reason: Optional[str] = None) -> int:
        if not INTEGER_REGEX.fullmatch(text):
            raise InvalidSyntax(
                pos=pos, expected="integer", source=self.string, got=text, reason=reason
            )
        value = int(text)
        if value < INT_MIN or value > INT_MAX:
            raise OutOfRange(
                pos=pos,
                expected=f"integer between {INT_MIN} and {INT_MAX}",
                source=self.string,
                got=text,
                reason=reason,
            )
        return value

    def parse_item(self, item: str) -> Seq:
        parts = item.split(RANGE_SEPARATOR)
        if len(parts) == 1:
            return Seq.single(self.parse_integer(item, pos=self.pos))
        elif len(parts) == 2:
            start, end = parts
            first = self.parse_integer(
                start, pos=self.pos, reason="the start of the range"
            )
            last = self.parse_integer(
                end,
                pos=self.pos + len(start) + len(RANGE_SEPARATOR),
                reason="the end of the range",
            )
            return Seq.between(first, last)
        else:
            # A range has exactly two endpoints, e.g. 1...3...5 is invalid.
            raise InvalidSyntax(
                pos=self.pos,
                expected=["integer", "range"],
                source=self.string,
                got=item,
            )

    def parse(self) -> List[Seq]:
        """
        Parse the whole string into the runs of integers, without expanding them.

        Returns:
            seqs (List[Seq]): Runs of integers in the order of their appearance

        Raises:
            InvalidSyntax: If the string is not a valid specification.
            OutOfRange: If an integer does not fit between INT_MIN and INT_MAX.
        """
        self.pos = 0
        # The empty string is the only place where an empty item is allowed.
        if self.string == "":
            return []
        seqs = []
        for item in self.string.split(ITEM_SEPARATOR):
            seqs.append(self.parse_item(item))
            self.pos += len(item) + len(ITEM_SEPARATOR)
        return seqs
