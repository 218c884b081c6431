"""Results scraper library: fetch, locate, extract and normalize electorate results.

Public API:
    - scrape_electorates: Orchestrate one scrape run into a ScrapeResult
    - CanonicalMemberRecord / ScrapeResult: Output models
    - extract_votes / extract_percentage / extract_swing: Lenient numeric extractors
    - PartyCanonicalizer / PartyTaxonomy: Party alias and short-code resolution
    - find_record_array: Schema-free search for the electorate array
    - RecordExtractor / extract_record: One upstream item to one record
    - BaseStrategy / StrategyTier / default_strategies / run_strategy_chain: Tiered retrieval
    - ResultsFetcher / FetchError: HTTP client for the results source
    - dedupe_records: Natural-key deduplication
"""

from electorate_scraper.lib.results_scraper.dedupe import dedupe_records
from electorate_scraper.lib.results_scraper.extractors import extract_percentage, extract_swing, extract_votes
from electorate_scraper.lib.results_scraper.fetcher import FetchError, ResultsFetcher
from electorate_scraper.lib.results_scraper.locator import find_record_array
from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord, ScrapeResult
from electorate_scraper.lib.results_scraper.parties import (
    DEFAULT_PARTY_TAXONOMY,
    PartyCanonicalizer,
    PartyTaxonomy,
    canonicalize_party,
    short_code_for,
)
from electorate_scraper.lib.results_scraper.pipeline import scrape_electorates
from electorate_scraper.lib.results_scraper.record import RecordExtractor, extract_record
from electorate_scraper.lib.results_scraper.strategies import (
    BaseStrategy,
    ChainOutcome,
    StrategyError,
    StrategyTier,
    default_strategies,
    run_strategy_chain,
)

__all__ = [
    "DEFAULT_PARTY_TAXONOMY",
    "BaseStrategy",
    "CanonicalMemberRecord",
    "ChainOutcome",
    "FetchError",
    "PartyCanonicalizer",
    "PartyTaxonomy",
    "RecordExtractor",
    "ResultsFetcher",
    "ScrapeResult",
    "StrategyError",
    "StrategyTier",
    "canonicalize_party",
    "dedupe_records",
    "default_strategies",
    "extract_percentage",
    "extract_record",
    "extract_swing",
    "extract_votes",
    "find_record_array",
    "run_strategy_chain",
    "scrape_electorates",
    "short_code_for",
]
