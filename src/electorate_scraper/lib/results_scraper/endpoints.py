"""URL templates for the ABC News election results source.

All URLs are parameterized by a lowercase region (jurisdiction) code such as
``qld`` and a period (election year) such as ``2024``.
"""

import json

import httpx

ABC_BASE_URL = "https://www.abc.net.au"
DAT_BASE_URL = f"{ABC_BASE_URL}/dat/news/elections"
CHANNEL_REFETCH_URL = f"{ABC_BASE_URL}/news-web/api/loader/channelrefetch"
ELECTORATE_LIST_LOADER = "ElectorateList"
RESULTS_DIR = "results"

# Results publish time per (region, year), passed to the internal API.
PUBLISH_DATES: dict[tuple[str, str], str] = {
    ("qld", "2020"): "2020-10-31T18:00:00+10:00",
    ("qld", "2024"): "2024-10-26T17:00:00+10:00",
    ("wa", "2021"): "2021-03-13T18:00:00+08:00",
    ("wa", "2025"): "2025-03-08T18:00:00+08:00",
    ("nsw", "2023"): "2023-03-25T18:00:00+11:00",
    ("vic", "2022"): "2022-11-26T18:00:00+11:00",
    ("sa", "2022"): "2022-03-19T18:00:00+10:30",
    ("tas", "2024"): "2024-03-23T18:00:00+11:00",
    ("tas", "2025"): "2025-07-19T18:00:00+10:00",
    ("act", "2024"): "2024-10-19T18:00:00+11:00",
    ("nt", "2024"): "2024-08-24T18:00:00+09:30",
}

# Lower-house seats per region; majority is derived from it.
SEAT_COUNTS: dict[str, int] = {
    "qld": 93,
    "wa": 59,
    "nsw": 93,
    "vic": 88,
    "sa": 47,
    "tas": 35,
    "act": 25,
    "nt": 25,
}
DEFAULT_SEAT_COUNT = 93

# Authoritative per-region sources tried only after every ABC tier fails.
REGIONAL_FALLBACK_URLS: dict[str, tuple[str, ...]] = {
    "qld": ("https://results.elections.qld.gov.au/SGE{year}",),
}


def publish_date_for(region: str, period: str) -> str:
    """Publish date for ``(region, period)``, or 1 January of ``period`` when unknown."""
    return PUBLISH_DATES.get((region, period), f"{period}-01-01T00:00:00+10:00")


def majority_for(total_seats: int) -> int:
    return total_seats // 2 + 1


def remote_content_path(region: str, period: str) -> str:
    return f"{DAT_BASE_URL}/{region}/{period}"


def direct_json_urls(region: str, period: str) -> list[str]:
    """Static result files published alongside the results page (tier A)."""
    base = f"{remote_content_path(region, period)}/{RESULTS_DIR}"
    return [f"{base}/electorates.json", f"{base}/summary.json"]


def internal_api_meta(region: str, period: str) -> dict[str, object]:
    """The ``props.meta`` object the results page sends to its loader API."""
    total_seats = SEAT_COUNTS.get(region, DEFAULT_SEAT_COUNT)
    content_path = remote_content_path(region, period)
    return {
        "year": period,
        "state": region,
        "maxParties": 4,
        "maxSwing": 15,
        "totalSeats": total_seats,
        "toWin": majority_for(total_seats),
        "showBooth": False,
        "useV3": True,
        "publishDate": publish_date_for(region, period),
        "remoteContentPath": content_path,
        "resultsDir": RESULTS_DIR,
        "picturePath": f"{content_path}/guide/photos/",
    }


def internal_api_urls(region: str, period: str) -> list[str]:
    """Loader API query for the electorate list (tier B)."""
    props = json.dumps({"meta": internal_api_meta(region, period)}, separators=(",", ":"))
    url = httpx.URL(CHANNEL_REFETCH_URL, params={"name": f"Election{ELECTORATE_LIST_LOADER}", "props": props})
    return [str(url)]


def results_page_url(region: str, period: str) -> str:
    """Public results page (tiers C and D)."""
    return f"{ABC_BASE_URL}/news/elections/{region}/{period}/results"


def regional_fallback_urls(region: str, period: str) -> list[str]:
    """Region-specific last-resort sources (tier E); empty for most regions."""
    return [template.format(year=period) for template in REGIONAL_FALLBACK_URLS.get(region, ())]


def known_regions() -> list[str]:
    """Regions with a known publish date or a regional fallback, sorted."""
    regions = {region for region, _ in PUBLISH_DATES} | set(REGIONAL_FALLBACK_URLS)
    return sorted(regions)


def known_periods(region: str) -> list[str]:
    return sorted(period for known, period in PUBLISH_DATES if known == region)
