import io
import logging

from marshalkit import setup_logging
from marshalkit.record import get_record_type
from tests.schemas import Tag


def test_setup_logging_replaces_handler():
    stream = io.StringIO()
    setup_logging(verbose=True, stream=stream)
    logger = setup_logging(verbose=True, stream=stream)
    handlers = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG


def test_debug_records_for_cache_misses():
    stream = io.StringIO()
    setup_logging(level=logging.DEBUG, stream=stream)
    get_record_type(Tag)
    assert "Record type cache miss: Tag" in stream.getvalue()
    setup_logging(level=logging.WARNING, stream=io.StringIO())
