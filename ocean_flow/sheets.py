# sheets.py: read a public spreadsheet tab through its CSV export
# region Imports
from __future__ import annotations
import csv
import io
import logging
from typing import List, Optional
import requests

from ocean_flow.config import SHEETS_BASE_URL, SHEETS_TIMEOUT_SEC, DEFAULT_TAB_GID
from ocean_flow.errors import (
    InvalidSheetUrl, PrivateSheet, SheetAccessError, SheetNetworkError,
    SheetNotFound, SheetRateLimited,
)
from ocean_flow.sheet_url import extract_gid, extract_sheet_id
# endregion

logger = logging.getLogger(__name__)

# region CSV Parsing
def parse_csv(text: str) -> List[List[str]]:
    """CSV text -> rows of raw strings. Blank lines are kept as empty rows."""
    return [row for row in csv.reader(io.StringIO(text))]
# endregion

# region Fetch
def export_url(sheet_id: str, gid: str = DEFAULT_TAB_GID) -> str:
    return f"{SHEETS_BASE_URL}/{sheet_id}/export?format=csv&gid={gid}"


def _status_error(status: int, sheet_id: str) -> SheetAccessError:
    if status in (401, 403):
        return PrivateSheet("Sheet is private or requires authentication", sheetId=sheet_id, status=status)
    if status == 404:
        return SheetNotFound("Sheet not found or has been deleted", sheetId=sheet_id)
    if status == 429:
        return SheetRateLimited("Rate limit exceeded for public access", sheetId=sheet_id)
    return SheetAccessError(f"Sheet export failed with HTTP {status}", sheetId=sheet_id, status=status)


def fetch_tab_values(
    sheet_id: str,
    gid: str = DEFAULT_TAB_GID,
    session: Optional[requests.Session] = None,
) -> List[List[str]]:
    url = export_url(sheet_id, gid)
    http = session or requests
    try:
        r = http.get(url, timeout=SHEETS_TIMEOUT_SEC)
    except requests.RequestException as e:
        logger.warning("Sheet export %s unreachable: %s", sheet_id, e)
        raise SheetNetworkError("Network error accessing Google Sheets", sheetId=sheet_id) from e

    if r.status_code != 200:
        raise _status_error(r.status_code, sheet_id)
    # a private sheet redirects to the sign-in page instead of failing
    if "text/html" in r.headers.get("Content-Type", ""):
        raise PrivateSheet("Sheet is private or requires authentication", sheetId=sheet_id)

    r.encoding = r.encoding or "utf-8"
    rows = parse_csv(r.text)
    logger.info("Fetched sheet %s gid=%s: %d rows", sheet_id, gid, len(rows))
    return rows


def fetch_from_url(url: str, tab: Optional[str] = None, session: Optional[requests.Session] = None):
    """
    Resolve a sheet URL (or bare ID) plus optional tab gid and return
    (sheet_id, gid, rows). An explicit `tab` wins over a gid in the URL.
    """
    sheet_id = extract_sheet_id(url)
    if not sheet_id:
        raise InvalidSheetUrl("Cannot extract Sheet ID from the provided URL", providedUrl=url)
    gid = (str(tab).strip() if tab not in (None, "") else None) or extract_gid(url) or DEFAULT_TAB_GID
    if not gid.isdigit():
        raise InvalidSheetUrl("Tab must be given as a numeric gid", tab=tab)
    return sheet_id, gid, fetch_tab_values(sheet_id, gid, session=session)
# endregion
