#!/usr/bin/env python3
"""
verify_root.py — Check a running server's root document against a reference.

Place at: tools/verify_root.py
Run from the repo root (folder that contains discovery/).

What this does:
  - GETs <base>/ once (Accept: application/json, no retries).
  - Compares the body with the reference document (strict by default).
  - Prints a JSON verdict.

Exit codes:
  - 0  => documents match.
  - 1  => documents differ (every difference printed).
  - 2  => server unreachable / non-2xx, or reference missing.

Common examples:
  python tools/verify_root.py
  python tools/verify_root.py --base http://127.0.0.1:8000 --reference ./root.json
  python tools/verify_root.py --lenient     # tolerate extra keys on the server side
"""
import sys, json, argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from discovery.errors import ComparisonMismatch, VerificationError  # noqa: E402
from discovery.verifier import DEFAULT_REFERENCE, verify_root  # noqa: E402
from shared.jsoncompare import CompareMode  # noqa: E402
from shared.logging import setup_json_logging  # noqa: E402

DEFAULT_BASE = "http://127.0.0.1:8000"


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Verify GET / against a golden root document.")
    ap.add_argument("--base", default=DEFAULT_BASE, help="API base URL")
    ap.add_argument("--reference", default=DEFAULT_REFERENCE, help="Reference file path or packaged resource name")
    ap.add_argument("--timeout", type=float, default=15.0, help="Request timeout seconds")
    ap.add_argument("--lenient", action="store_true", help="Allow keys the reference does not declare")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args(argv)

    setup_json_logging(args.log_level, stream=sys.stderr)
    mode = CompareMode.LENIENT if args.lenient else CompareMode.STRICT
    try:
        res = verify_root(args.base, args.reference, timeout=args.timeout, mode=mode)
    except ComparisonMismatch as e:
        print(json.dumps({
            "ok": False,
            "url": e.url,
            "missing": e.missing_relations(),
            "unexpected": e.unexpected_relations(),
            "differences": [d.describe() for d in e.differences],
        }, indent=2))
        return 1
    except VerificationError as e:
        print(json.dumps({"ok": False, "error": type(e).__name__, "detail": str(e)}), file=sys.stderr)
        return 2

    print(json.dumps({"ok": True, "url": res.url, "mode": res.mode.value}))
    return 0


if __name__ == "__main__":
    sys.exit(main())
