import pytest

from shasper.basic import boolean, uint8, uint16, uint64
from shasper.codec import IncorrectSize
from shasper.lists import decode_list, encode_list
from shasper.variable import List


def test_fixed_elements_are_concatenated():
    assert encode_list(uint16, [1, 2]) == b"\x01\x00\x02\x00"


def test_empty_list_encodes_empty():
    assert encode_list(uint64, []) == b""
    assert decode_list(uint64, b"") == []


@pytest.mark.parametrize(
    "element_type,values",
    [
        (uint8, [0, 1, 255]),
        (uint64, [0, 2**64 - 1, 12345]),
        (boolean, [True, False, True]),
    ],
)
def test_round_trip_fixed(element_type, values):
    assert decode_list(element_type, encode_list(element_type, values)) == values


def test_round_trip_variable_elements():
    inner = List(uint8)
    values = [[1], [], [2, 3, 4]]
    assert decode_list(inner, encode_list(inner, values)) == values


def test_fixed_encoding_length_is_count_times_size():
    values = [7, 8, 9, 10]
    assert len(encode_list(uint16, values)) == len(values) * uint16.size


def test_trailing_partial_element_is_ignored():
    encoded = encode_list(uint16, [513])
    assert decode_list(uint16, encoded + b"\x07") == [513]


def test_bad_offset_raises():
    inner = List(uint8)
    with pytest.raises(IncorrectSize):
        decode_list(inner, b"\xff\x00\x00\x00")