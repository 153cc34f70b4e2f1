from __future__ import annotations

from collections import Counter
from typing import Any, Dict

from ...infra.gateway import UserSession
from ...schemas import ScanCreate
from ..validation import parse_payload


SCAN_HISTORY_TABLE = "scan_history"
DEFAULT_SCAN_LIMIT = 10


def save_scan(session: UserSession, payload: Any) -> Dict[str, Any]:
    request = parse_payload(ScanCreate, payload, required=("object_name", "category"))
    scan = session.insert(
        SCAN_HISTORY_TABLE,
        {
            "user_id": session.user_id,
            "object_name": request.object_name,
            "category": request.category,
            "carbon_footprint": request.carbon_footprint or 0,
        },
    )
    return {"success": True, "data": scan}


def list_scans(session: UserSession, limit: int = DEFAULT_SCAN_LIMIT) -> Dict[str, Any]:
    """Most recent scans plus per-category totals over the whole history."""
    owner = {"user_id": session.user_id}
    scans = session.select(
        SCAN_HISTORY_TABLE,
        owner,
        order_by="created_at",
        descending=True,
        limit=limit,
    )
    categories = session.select(SCAN_HISTORY_TABLE, owner, columns="category")
    counts = Counter(row.get("category") for row in categories)
    return {
        "scans": scans,
        "categoryCounts": dict(counts),
        "totalScans": len(categories),
    }
