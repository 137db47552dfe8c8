from dataclasses import dataclass
from typing import List, Optional

import pytest
from simple_parsing import ArgumentParser, field
from simple_parsing.helpers.serialization import encode, from_dict, to_dict

from intlist import INT_MAX, IntListIterator, InvalidSyntax
from intlist.config.arg_types.int_list import IntList


@dataclass
class SelectionConfig:
    """
    Selection of devices
    """

    # CPUs to use (given as a list or range)
    cpus: Optional[IntList] = field(default=None, nargs=None)
    # Random seed
    seed: int = field(default=1234, alias="-s")


# Helper to parse the arguments into the config
def parse_selection(args: List[str]) -> SelectionConfig:
    parser = ArgumentParser()
    parser.add_arguments(SelectionConfig, dest="selection")
    cfg: SelectionConfig = parser.parse_args(args).selection
    return cfg


def test_int_list():
    ints = IntList("1...3,7,5...3,9")
    assert ints.values == [1, 2, 3, 7, 5, 4, 3, 9]
    assert list(ints) == [1, 2, 3, 7, 5, 4, 3, 9]
    assert len(ints) == 8
    assert str(ints) == "1...3,7,5...3,9"
    assert repr(ints) == (
        "IntList(arg='1...3,7,5...3,9', values=[1, 2, 3, 7, 5, 4, 3, 9])"
    )


def test_int_list_empty():
    ints = IntList("")
    assert ints.values == []
    assert len(ints) == 0


def test_int_list_iterator():
    ints = IntList("4,12...8,-3")
    it = ints.iterator()
    assert isinstance(it, IntListIterator)
    assert list(it) == ints.values
    # Every call creates a new iterator
    assert list(ints.iterator()) == ints.values
    assert list(ints) == list(ints)


def test_int_list_huge_range():
    # Only validated, the values are not expanded unless they are accessed.
    ints = IntList(f"0...{INT_MAX}")
    it = iter(ints)
    assert [next(it) for _ in range(3)] == [0, 1, 2]


def test_int_list_invalid():
    with pytest.raises(InvalidSyntax) as e:
        IntList("1-3")
    assert str(e.value) == "Expected integer at position 0 - got `1-3` in: '1-3'"


def test_parse_args():
    cfg = parse_selection(["--cpus", "0...3,8", "-s", "7"])
    assert isinstance(cfg.cpus, IntList)
    assert cfg.cpus.values == [0, 1, 2, 3, 8]
    assert cfg.seed == 7


def test_parse_args_default():
    cfg = parse_selection([])
    assert cfg.cpus is None
    assert cfg.seed == 1234


def test_parse_args_invalid():
    # argparse reports the invalid value and exits
    with pytest.raises(SystemExit):
        parse_selection(["--cpus", "0-3"])


def test_serialise():
    assert encode(IntList("1...3,7")) == "1...3,7"
    cfg = SelectionConfig(cpus=IntList("5...7,1"), seed=2)
    serialised = to_dict(cfg)
    assert serialised["cpus"] == "5...7,1"
    restored = from_dict(SelectionConfig, serialised)
    assert isinstance(restored.cpus, IntList)
    assert restored.cpus.values == [5, 6, 7, 1]
    assert restored.seed == 2
