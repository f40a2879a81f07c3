"""
test_tools.py — tools/verify_root.py and tools/snapshot_root.py.

What this does:
  - Loads each script by path and swaps its network call for a stub.
  - verify_root: asserts 0 / 1 / 2 for pass / mismatch / transport failure.
  - snapshot_root: asserts the reference is written in served order, 1 on request errors.
"""
import importlib.util
import json
import logging
from pathlib import Path

import pytest
import requests

from discovery.errors import ComparisonMismatch, TransportError
from discovery.verifier import VerificationResult
from shared.jsoncompare import compare

SCRIPT = Path(__file__).resolve().parents[1] / "tools" / "verify_root.py"


@pytest.fixture
def tool():
    spec = importlib.util.spec_from_file_location("verify_root_tool", SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    root = logging.getLogger()
    saved = (root.handlers[:], root.level)
    yield mod
    # main() installs a JSON handler on stderr
    root.handlers, root.level = saved[0], saved[1]


def test_pass_exit_zero(tool, monkeypatch, capsys):
    monkeypatch.setattr(tool, "verify_root", lambda base, ref, **kw: VerificationResult(url=base + "/", passed=True))
    assert tool.main(["--base", "http://x"]) == 0
    assert json.loads(capsys.readouterr().out)["ok"] is True


def test_mismatch_exit_one(tool, monkeypatch, capsys):
    def fail(base, ref, **kw):
        raise ComparisonMismatch(compare({"metrics": {"href": "/m"}}, {"debug": {"href": "/d"}}), url=base)

    monkeypatch.setattr(tool, "verify_root", fail)
    assert tool.main([]) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["missing"] == ["metrics"]
    assert out["unexpected"] == ["debug"]


def test_transport_exit_two(tool, monkeypatch, capsys):
    def refuse(base, ref, **kw):
        raise TransportError("connection refused")

    monkeypatch.setattr(tool, "verify_root", refuse)
    assert tool.main([]) == 2
    assert json.loads(capsys.readouterr().err)["error"] == "TransportError"


SNAPSHOT = SCRIPT.parent / "snapshot_root.py"


@pytest.fixture
def snapshot_tool():
    spec = importlib.util.spec_from_file_location("snapshot_root_tool", SNAPSHOT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def test_snapshot_writes_reference_in_served_order(snapshot_tool, monkeypatch, tmp_path, capsys):
    served = {
        "dashboard": {"href": "http://localhost/dashboard"},
        "about": {"href": "http://localhost/about"},
        "tasks/executions/execution": {"href": "http://localhost/tasks/executions/{id}", "templated": True},
    }
    monkeypatch.setattr(snapshot_tool, "fetch_root", lambda base, timeout: served)
    out = tmp_path / "root.json"

    assert snapshot_tool.main(["--base", "http://x", "--out", str(out)]) == 0
    written = json.loads(out.read_text(encoding="utf-8"))
    assert list(written) == ["dashboard", "about", "tasks/executions/execution"]
    assert written == served
    assert json.loads(capsys.readouterr().out) == {"ok": True, "relations": 3, "out": str(out)}


def test_snapshot_request_error_exit_one(snapshot_tool, monkeypatch, tmp_path, capsys):
    def refuse(base, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(snapshot_tool, "fetch_root", refuse)
    out = tmp_path / "root.json"

    assert snapshot_tool.main(["--out", str(out)]) == 1
    assert not out.exists()
    assert json.loads(capsys.readouterr().err)["ok"] is False
