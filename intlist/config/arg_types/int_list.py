from functools import cached_property
from typing import Iterator, List

from simple_parsing.helpers.serialization import encode, register_decoding_fn

from ...iterator import IntListIterator


class IntList:
    """
    A list of integers given as a command line option, where the integers are separated
    by commas (,) and consecutive integers can be given as a range with an ellipsis
    (...).

    Note: The ranges are *inclusive* and can also be decreasing, i.e. 1...3 == [1, 2, 3]
    and 3...1 == [3, 2, 1]. The order and duplicates are kept as given.

    The arg is validated when it is created, but the values are only expanded when
    they are first accessed (values, len() or repr()). Iterating over it produces them
    lazily, so huge ranges such as 0...9223372036854775807 can be given as long as
    they are only iterated over.

    Example:
        # Single value
        1 => [1]
        # Multiple values
        1,2,3,4 => [1, 2, 3, 4]
        # Range
        1...4 => [1, 2, 3, 4]
        # Decreasing range
        4...1 => [4, 3, 2, 1]
        # Combination
        4,12...8,-3 => [4, 12, 11, 10, 9, 8, -3]
    """

    arg: str

    def __init__(self, arg: str):
        self.arg = arg
        err = IntListIterator(arg).err
        if err is not None:
            # A ParseError (ValueError), which argparse reports as an invalid value.
            raise err

    @cached_property
    def values(self) -> List[int]:
        return list(self.iterator())

    def iterator(self) -> IntListIterator:
        """
        Creates a new iterator over the same specification, which produces the values
        lazily instead of expanding all of them.
        """
        return IntListIterator(self.arg)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[int]:
        return self.iterator()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(arg={repr(self.arg)}, values={self.values})"

    def __str__(self) -> str:
        return self.arg


# Serialised as the arg string, since arg == str(IntList(arg)), which allows saving and
# loading configs that contain it.
encode.register(IntList, str)
register_decoding_fn(IntList, IntList)
