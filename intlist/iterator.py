from collections import deque
from typing import Deque, List, Optional, Tuple

from .parser import IntListParser, ParseError, Seq


class IteratorDone(Exception):
    """
    Marks an iterator that has already signalled the end of the iteration.
    Only the DONE instance is ever used.
    """


DONE = IteratorDone("no more items in iterator")


class IteratorMisuse(RuntimeError):
    """
    The iterator was advanced although the caller had already been told that it must
    not be: it is invalid or it is done.

    This is a programming error and not a problem with the input, it should be fixed
    rather than caught.
    """


class IntListIterator:
    """
    Lazily produces the integers of a specification, one at a time, without expanding
    the ranges up front. See IntListParser for the format.

    The specification is parsed when the iterator is created. An invalid specification
    does not raise, it is kept as the error of the iterator instead and the iterator
    must not be advanced.

    Example:
        it = IntListIterator("1...1000,1030...1014,2000")
        if it.err is not None:
            # Handle the error, advancing would raise IteratorMisuse.
            ...
        while True:
            value, done = it.advance()
            if done:
                break
            print(value)

        # Or simply as a regular Python iterator
        for value in IntListIterator("4,12...8,-3"):
            print(value)

    Note: As a Python iterator, an exhausted iterator keeps raising StopIteration,
    whereas calling advance() again after it was done raises IteratorMisuse.
    """

    spec: str
    seqs: Deque[Seq]

    def __init__(self, spec: str):
        self.spec = spec
        self._err: Optional[Exception] = None
        try:
            self.seqs = deque(IntListParser(spec).parse())
        except ParseError as e:
            self.seqs = deque()
            self._err = e

    @property
    def err(self) -> Optional[Exception]:
        """
        The error of the iterator, which is one of:
            - None: Valid and not finished yet
            - ParseError: The specification was invalid
            - DONE: advance() has already signalled the end of the iteration
        """
        return self._err

    def state(self) -> str:
        if self._err is None:
            return "ready"
        elif self._err is DONE:
            return "done"
        else:
            return "invalid"

    def advance(self) -> Tuple[int, bool]:
        """
        Get the next integer.

        Returns:
            value (int): The next integer, only valid if not done.
            done (bool): Whether the iteration has finished, in which case there is no
                value and the iterator must not be advanced anymore.

        Raises:
            IteratorMisuse: If the iterator is invalid or was already done.
        """
        if self._err is not None:
            if self._err is DONE:
                # The caller has already been told that there is nothing left.
                raise IteratorMisuse(
                    "advance() called again after the iteration was done."
                )
            raise IteratorMisuse("advance() called on invalid iterator.")
        if len(self.seqs) == 0:
            self._err = DONE
            return 0, True
        seq = self.seqs[0]
        value = seq.next
        if value == seq.last:
            self.seqs.popleft()
        else:
            seq.next += seq.step
        return value, False

    def __iter__(self) -> "IntListIterator":
        return self

    def __next__(self) -> int:
        # Exhausted Python iterators keep raising StopIteration, only advance() treats
        # this as misuse.
        if self._err is DONE:
            raise StopIteration
        value, done = self.advance()
        if done:
            raise StopIteration
        return value

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"{name}(spec={repr(self.spec)}, state={self.state()})"


def parse(spec: str) -> List[int]:
    """
    Parse the specification into the list of all its integers.

    Args:
        spec (str): Comma separated integers and ranges, e.g. "1...3,7,5...3,9"

    Returns:
        values (List[int]): All integers in order, e.g. [1, 2, 3, 7, 5, 4, 3, 9]

    Raises:
        InvalidSyntax: If the specification is not valid.
        OutOfRange: If an integer does not fit between INT_MIN and INT_MAX.
    """
    it = IntListIterator(spec)
    if it.err is not None:
        raise it.err
    values = []
    while True:
        value, done = it.advance()
        if done:
            break
        values.append(value)
    return values
