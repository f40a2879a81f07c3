# tests/test_logging.py
import io
import json
import logging

from shared.logging import setup_json_logging


def test_json_lines_with_context():
    buf = io.StringIO()
    root = logging.getLogger()
    saved = (root.handlers[:], root.level)
    try:
        setup_json_logging("info", stream=buf)
        logging.getLogger("discovery.test").info(
            "root document ready", extra={"context": {"relations": 5, "level": "ignored"}}
        )
        logging.getLogger("discovery.test").debug("dropped")
    finally:
        root.handlers, root.level = saved[0], saved[1]

    lines = [json.loads(line) for line in buf.getvalue().splitlines()]
    assert len(lines) == 1
    assert lines[0]["msg"] == "root document ready"
    assert lines[0]["logger"] == "discovery.test"
    assert lines[0]["relations"] == 5
    # context never overrides the base fields
    assert lines[0]["level"] == "INFO"
