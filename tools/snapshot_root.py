#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
snapshot_root.py — Write a new reference root document from a running server.

Use when the API surface changes on purpose; review the diff before committing.

Common examples:
  python tools/snapshot_root.py
  python tools/snapshot_root.py --base http://127.0.0.1:8000 --out ./root.json
"""
import sys, json, argparse
from pathlib import Path

import requests

DEFAULT_BASE = "http://127.0.0.1:8000"
DEFAULT_OUT = Path(__file__).resolve().parents[1] / "discovery" / "reference" / "root-controller-result.json"


def fetch_root(base_url: str, timeout: int) -> dict:
    r = requests.get(f"{base_url.rstrip('/')}/", headers={"Accept": "application/json"}, timeout=(10, timeout))
    r.raise_for_status()
    return r.json()


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Snapshot GET / into a reference document.")
    ap.add_argument("--base", default=DEFAULT_BASE, help="API base URL")
    ap.add_argument("--out", default=str(DEFAULT_OUT), help="Where to write the reference")
    ap.add_argument("--timeout", type=int, default=30, help="Read timeout seconds")
    args = ap.parse_args(argv)

    try:
        doc = fetch_root(args.base, args.timeout)
    except (requests.RequestException, ValueError) as e:
        print(json.dumps({"ok": False, "error": str(e)}), file=sys.stderr)
        return 1

    out = Path(args.out)
    # keep registry order: it is the order GET / serves
    out.write_text(json.dumps(doc, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    print(json.dumps({"ok": True, "relations": len(doc), "out": str(out)}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
