import pytest

from vietqr_codec.errors import InvalidInput, MalformedPayload
from vietqr_codec.tlv import TLVItem, build_tlv, parse_fields, parse_tlv, read_record


def test_serialize_pads_length():
    assert TLVItem(tag="00", value="01").serialize() == "000201"
    assert TLVItem(tag="62", value="").serialize() == "6200"
    assert TLVItem(tag="59", value="x" * 99).serialize() == "5999" + "x" * 99


def test_serialize_rejects_values_over_99_characters():
    with pytest.raises(InvalidInput) as exc_info:
        TLVItem(tag="01", value="1" * 100).serialize()
    assert "01" in exc_info.value.message


def test_nested_length_counts_rendered_children():
    inner = build_tlv([TLVItem(tag="00", value="970407"), TLVItem(tag="01", value="123")])
    assert inner == "000697040701" + "03123"
    assert TLVItem(tag="01", value=inner).serialize() == "0117" + inner


def test_read_record_returns_next_cursor():
    item, cursor = read_record("000201010211", 6)
    assert item == TLVItem(tag="01", value="11")
    assert cursor == 12


def test_parse_tlv_walks_all_records():
    items = list(parse_tlv("0002010102115802VN"))
    assert items == [
        TLVItem(tag="00", value="01"),
        TLVItem(tag="01", value="11"),
        TLVItem(tag="58", value="VN"),
    ]


def test_parse_tlv_empty_string():
    assert list(parse_tlv("")) == []


def test_zero_length_value():
    assert parse_fields("5400") == {"54": ""}


def test_last_duplicate_wins():
    assert parse_fields("5802VN5802US") == {"58": "US"}


def test_unknown_tags_are_kept():
    assert parse_fields("9903abc000201") == {"99": "abc", "00": "01"}


@pytest.mark.parametrize("data", ["00AB01", "000 01", "00-101", "00²101"])
def test_non_numeric_length_is_rejected(data):
    with pytest.raises(MalformedPayload) as exc_info:
        list(parse_tlv(data))
    assert exc_info.value.field == "00"
    assert exc_info.value.position == 0


def test_length_past_end_is_rejected():
    with pytest.raises(MalformedPayload) as exc_info:
        list(parse_tlv("0002010110abc", scope="field 38"))
    assert exc_info.value.field == "01"
    assert exc_info.value.position == 6
    assert "field 38" in exc_info.value.message


@pytest.mark.parametrize("data", ["0002010", "00020101", "000201010"])
def test_dangling_bytes_are_rejected(data):
    with pytest.raises(MalformedPayload) as exc_info:
        list(parse_tlv(data))
    assert exc_info.value.position == 6
    assert "Dangling" in exc_info.value.message
