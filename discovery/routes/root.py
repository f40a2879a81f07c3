"""
root.py — GET / : the hypermedia root document.

What this does:
  - Serves the link map built once at startup (app.state.root_body), byte for byte.
  - Answers 406 when the client cannot take JSON.
  - Sends an ETag and honours If-None-Match with 304.
  - Advertises the API revision in X-Api-Revision.

Common examples:
  curl -H "Accept: application/json" http://127.0.0.1:8000/
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response

router = APIRouter(tags=["discovery"])

_SPECIFICITY = {"*/*": 1, "application/*": 2, "application/json": 3}


def _specificity(media: str) -> int:
    if media.startswith("application/") and media.endswith("+json"):
        return 3
    return _SPECIFICITY.get(media, 0)


def accepts_json(accept: str | None) -> bool:
    if not accept or not accept.strip():
        return True
    # the most specific matching range decides: "application/json;q=0, */*" refuses JSON
    best = (0, 0.0)
    for part in accept.split(","):
        media, _, params = part.strip().partition(";")
        rank = _specificity(media.strip().lower())
        if not rank:
            continue
        q = "1"
        for p in params.split(";"):
            k, _, v = p.strip().partition("=")
            if k.strip().lower() == "q":
                q = v.strip()
        try:
            weight = float(q)
        except ValueError:
            continue
        if rank > best[0] or (rank == best[0] and weight > best[1]):
            best = (rank, weight)
    return best[0] > 0 and best[1] > 0


def require_json(accept: str | None = Header(None)) -> None:
    if not accepts_json(accept):
        raise HTTPException(status_code=406, detail="The root document is only available as application/json")


def _etag_matches(request: Request, etag: str) -> bool:
    if_none_match = request.headers.get("if-none-match")
    if not if_none_match:
        return False
    # If-None-Match uses weak comparison: W/"x" matches "x"
    client_etags = [t.strip().removeprefix("W/") for t in if_none_match.split(",")]
    return "*" in client_etags or etag.removeprefix("W/") in client_etags


@router.get("/", dependencies=[Depends(require_json)])
def root(request: Request):
    state = request.app.state
    headers = {
        "ETag": state.root_etag,
        "Cache-Control": "no-cache",
        "X-Api-Revision": str(state.settings.api_revision),
    }
    if _etag_matches(request, state.root_etag):
        return Response(status_code=304, headers=headers)
    return Response(content=state.root_body, media_type="application/json", headers=headers)
