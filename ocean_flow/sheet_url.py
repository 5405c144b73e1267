# region Imports
from __future__ import annotations
import re
from typing import Any, Dict, Optional
from ocean_flow.config import SHEETS_BASE_URL
# endregion

_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_PATH_RES = (
    re.compile(r"/spreadsheets/d/([A-Za-z0-9_-]+)"),
    re.compile(r"/spreadsheets/u/\d+/d/([A-Za-z0-9_-]+)"),   # mobile / multi-account links
)
_GID_RE = re.compile(r"[?&#]gid=(\d+)")
_HOST_RE = re.compile(r"^https://(docs|drive)\.google\.com/")


# region Extraction
def extract_sheet_id(url: Optional[str]) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None
    url = url.strip()
    if not re.match(r"^https?://", url) and _ID_RE.match(url):
        return url    # already a bare ID
    for pat in _PATH_RES:
        m = pat.search(url)
        if m:
            return m.group(1)
    return None


def extract_gid(url: Optional[str]) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None
    m = _GID_RE.search(url)
    return m.group(1) if m else None


def is_valid_sheets_url(url: Optional[str]) -> bool:
    if not url or not isinstance(url, str):
        return False
    return bool(_HOST_RE.match(url)) and "/spreadsheets/" in url and extract_sheet_id(url) is not None
# endregion

# region Classification
def access_type(url: str) -> str:
    if "usp=sharing" in url:
        return "public_sharing"
    if "/edit" in url:
        return "edit_access"
    if "/view" in url:
        return "view_only"
    if "userstoinvite" in url:
        return "invite_link"
    return "direct_access"


def parse_sheet_url(url: str) -> Dict[str, Any]:
    return {
        "isValid": is_valid_sheets_url(url),
        "sheetId": extract_sheet_id(url),
        "gid": extract_gid(url),
        "originalUrl": url,
        "isPublicLink": "usp=sharing" in url or "userstoinvite" in url,
        "accessType": access_type(url),
    }


def sheet_urls(sheet_id: str) -> Dict[str, str]:
    base = f"{SHEETS_BASE_URL}/{sheet_id}"
    return {
        "edit": f"{base}/edit",
        "view": f"{base}/view",
        "share": f"{base}/edit?usp=sharing",
        "csv": f"{base}/export?format=csv",
    }
# endregion
