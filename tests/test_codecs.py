import json
from datetime import date

import numpy as np
import pandas as pd
import pytest

from marshalkit.codecs import (
    SnapshotWriter,
    decode_json_object,
    decode_query,
    encode_query,
    frame_to_rows,
    read_environment,
    read_snapshot_file,
    split_key,
    to_python,
)


def test_split_key():
    assert split_key("a") == ["a"]
    assert split_key("a[b][]") == ["a", "b", ""]


def test_decode_query_nested_and_lists():
    data = decode_query("?name=Ann&address[city]=Oslo&tags[]=x&tags[]=y&ids[0]=1&ids[1]=2")
    assert data == {
        "name": "Ann",
        "address": {"city": "Oslo"},
        "tags": ["x", "y"],
        "ids": ["1", "2"],
    }


def test_encode_query_uses_indexed_brackets():
    query = encode_query({"a": {"b": 1}, "c": ["x", "y"], "d": True}, omit=["e"])
    assert query == "a%5Bb%5D=1&c%5B0%5D=x&c%5B1%5D=y&d=true"
    assert decode_query(query) == {"a": {"b": "1"}, "c": ["x", "y"], "d": "true"}


def test_encode_query_omits_keys():
    assert encode_query({"a": 1, "b": 2}, omit=["b"]) == "a=1"


def test_decode_json_object_rejects_arrays():
    with pytest.raises(TypeError):
        decode_json_object("[1, 2]")
    with pytest.raises(json.JSONDecodeError):
        decode_json_object("{oops")


def test_read_environment_omits_unset():
    environ = {"NAME": "Ann", "OTHER": "x"}
    assert read_environment(["NAME", "AGE"], environ) == {"NAME": "Ann"}


def test_snapshot_round_trip(tmp_path):
    path = SnapshotWriter().write({"a": 1, "b": ["x", None]}, tmp_path / "nested" / "snap.yaml")
    assert path.exists()
    assert read_snapshot_file(path) == {"a": 1, "b": ["x", None]}


def test_snapshot_writer_checks_suffix_and_overwrite(tmp_path):
    with pytest.raises(ValueError, match="Unsupported snapshot suffix"):
        SnapshotWriter().write({}, tmp_path / "snap.json")
    path = tmp_path / "snap.yml"
    SnapshotWriter().write({"a": 1}, path)
    with pytest.raises(FileExistsError):
        SnapshotWriter(overwrite=False).write({"a": 2}, path)


def test_snapshot_must_hold_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError):
        read_snapshot_file(path)


def test_dataframe_rows_are_plain_python():
    df = pd.DataFrame({"n": [1, 2], "x": [1.5, np.nan], "d": pd.to_datetime(["2024-01-01", None])})
    rows = frame_to_rows(df)
    assert rows[0]["n"] == 1 and type(rows[0]["n"]) is int
    assert rows[1]["x"] is None
    assert rows[1]["d"] is None
    assert rows[0]["d"].date() == date(2024, 1, 1)


def test_to_python():
    assert to_python(np.int64(3)) == 3
    assert type(to_python(np.float32(1.5))) is float
    assert to_python([1, 2]) == [1, 2]
