"""
Tests for the JSON persistence codec.
"""

import json

import pytest

from model import CircuitNode, ElementDecodeError, Orientation, SimpleSwitch, StraightTrack
from storage import deserialize, ensure_json_extension, load_elements, save_elements, serialize

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def elements():
    return [
        StraightTrack(id=1, x=0.0, y=0.0, color=RED, gauge=8.0, length=1234.5, rotation=-30.0, filled=True),
        CircuitNode(id=5, x=10.0, y=20.0, color=BLUE, gauge=3.0, bar_length=30.0, orientation=Orientation.INVERTED),
        SimpleSwitch(id=3, x=-7.25, y=4.0, color=(0, 206, 209, 255), gauge=10.0),
    ]


class TestSerialize:
    def test_round_trip_preserves_order_and_fields(self, elements):
        assert deserialize(serialize(elements)) == elements

    def test_output_is_indented_json_array(self, elements):
        text = serialize(elements).decode("utf-8")
        assert text.startswith("[\n  {")
        payload = json.loads(text)
        assert [item["tipo"] for item in payload] == [0, 1, 2]
        assert payload[1]["orientacaoTC"] == "Invertido"

    def test_empty_list(self):
        assert deserialize(serialize([])) == []


class TestDeserialize:
    def test_null_is_empty(self):
        assert deserialize(b"null") == []

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"[{",
            b"{}",
            b'"elements"',
            b"\xff\xfe\x00",
            b'[{"tipo": 2, "id": 1, "x": 0}]',
        ],
    )
    def test_malformed_data_raises_decode_error(self, data):
        with pytest.raises(ElementDecodeError):
            deserialize(data)

    def test_oversized_integer_raises_decode_error(self):
        huge = b"1" + b"0" * 400
        data = b'[{"tipo": 2, "id": 1, "x": ' + huge + b', "y": 0, "espessura": 10, "cor": {}}]'
        with pytest.raises(ElementDecodeError, match="out of range"):
            deserialize(data)

    def test_deeply_nested_json_raises_decode_error(self):
        with pytest.raises(ElementDecodeError):
            deserialize(b"[" * 100000 + b"]" * 100000)

    def test_duplicate_ids_rejected(self, elements):
        elements[2].id = 1
        with pytest.raises(ElementDecodeError, match="duplicate"):
            deserialize(serialize(elements))

    def test_reads_files_written_with_all_fields(self):
        data = b"""[
          {"tipo": 0, "id": 1, "x": 0, "y": 0, "comprimento": 500, "largura": 0, "rotacao": 90,
           "cor": {"R": 255, "G": 0, "B": 0, "A": 255}, "espessura": 8, "modoCheio": true},
          {"tipo": 1, "id": 2, "x": 5, "y": 5, "comprimento": 0, "largura": 30, "rotacao": 0,
           "cor": {"R": 0, "G": 0, "B": 255, "A": 255}, "espessura": 3, "orientacaoTC": "Normal"}
        ]"""
        track, node = deserialize(data)
        assert track.filled is True
        assert track.rotation == 90
        assert node.orientation is Orientation.NORMAL
        assert node.bar_length == 30


class TestFiles:
    def test_save_and_load(self, tmp_path, elements):
        path = tmp_path / "diagram.json"
        save_elements(elements, str(path))
        assert load_elements(str(path)) == elements

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_elements(str(tmp_path / "missing.json"))

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("diagram", "diagram.json"),
            ("diagram.json", "diagram.json"),
            ("DIAGRAM.JSON", "DIAGRAM.JSON"),
            ("diagram.txt", "diagram.txt.json"),
        ],
    )
    def test_ensure_json_extension(self, path, expected):
        assert ensure_json_extension(path) == expected
