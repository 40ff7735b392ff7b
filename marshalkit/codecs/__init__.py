"""External codecs.

This module converts between text or tabular formats and the plain
mappings the engine consumes and produces.
"""

from .dataframe import frame_to_rows, rows_to_frame, to_python
from .env import read_environment
from .json_codec import decode_json, decode_json_object, encode_json
from .query import decode_query, encode_query, flatten, split_key
from .snapshot import SnapshotWriter, read_snapshot_file

__all__ = [
    "SnapshotWriter",
    "decode_json",
    "decode_json_object",
    "decode_query",
    "encode_json",
    "encode_query",
    "flatten",
    "frame_to_rows",
    "read_environment",
    "read_snapshot_file",
    "rows_to_frame",
    "split_key",
    "to_python",
]
