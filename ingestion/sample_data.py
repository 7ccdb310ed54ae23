"""
Fixed demo data passed into the adapters at construction.

Everything here is immutable (frozen dataclasses, tuples, read-only
mappings). Congressional disclosures are not pulled from the House/Senate
portals; the congress adapter generates its sample from these fixtures.
"""

import random
from dataclasses import dataclass
from datetime import date, timedelta
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class CongressMember:
    member: str
    chamber: str
    party: str
    state: str


@dataclass(frozen=True)
class ListedStock:
    ticker: str
    name: str
    sector: str


@dataclass(frozen=True)
class DemoHolding:
    ticker: str
    company: str
    shares: int
    value: int


@dataclass(frozen=True)
class TrackedInstitution:
    cik: str
    name: str
    holdings: Tuple[DemoHolding, ...] = ()


@dataclass(frozen=True)
class CongressSampleConfig:
    """Inputs to the synthetic congressional trade generator"""
    members: Tuple[CongressMember, ...]
    stocks: Tuple[ListedStock, ...]
    amount_ranges: Tuple[str, ...]
    notable_trades: Tuple[Mapping[str, str], ...]
    sample_size: int = 250
    lookback_days: int = 180
    purchase_probability: float = 0.55


CONGRESS_MEMBERS: Tuple[CongressMember, ...] = (
    # Democrats - House
    CongressMember("Nancy Pelosi", "House", "D", "CA"),
    CongressMember("Josh Gottheimer", "House", "D", "NJ"),
    CongressMember("Ro Khanna", "House", "D", "CA"),
    CongressMember("Suzan DelBene", "House", "D", "WA"),
    CongressMember("Lois Frankel", "House", "D", "FL"),
    CongressMember("Debbie Wasserman Schultz", "House", "D", "FL"),
    CongressMember("Daniel Goldman", "House", "D", "NY"),
    CongressMember("Kathy Manning", "House", "D", "NC"),
    CongressMember("Marie Gluesenkamp Perez", "House", "D", "WA"),
    CongressMember("Susie Lee", "House", "D", "NV"),
    CongressMember("Tom Malinowski", "House", "D", "NJ"),
    CongressMember("Kurt Schrader", "House", "D", "OR"),
    CongressMember("Cindy Axne", "House", "D", "IA"),
    CongressMember("Dean Phillips", "House", "D", "MN"),
    CongressMember("Sean Casten", "House", "D", "IL"),
    CongressMember("Raja Krishnamoorthi", "House", "D", "IL"),
    CongressMember("Gilbert Cisneros", "House", "D", "CA"),
    CongressMember("Dwight Evans", "House", "D", "PA"),
    CongressMember("Earl Blumenauer", "House", "D", "OR"),
    CongressMember("Judy Chu", "House", "D", "CA"),
    # Republicans - House
    CongressMember("Dan Crenshaw", "House", "R", "TX"),
    CongressMember("Marjorie Taylor Greene", "House", "R", "GA"),
    CongressMember("Michael McCaul", "House", "R", "TX"),
    CongressMember("Pat Fallon", "House", "R", "TX"),
    CongressMember("Brian Mast", "House", "R", "FL"),
    CongressMember("French Hill", "House", "R", "AR"),
    CongressMember("Mark Green", "House", "R", "TN"),
    CongressMember("Kevin Hern", "House", "R", "OK"),
    CongressMember("Michael Guest", "House", "R", "MS"),
    CongressMember("Roger Williams", "House", "R", "TX"),
    CongressMember("Austin Scott", "House", "R", "GA"),
    CongressMember("John Curtis", "House", "R", "UT"),
    CongressMember("John Rutherford", "House", "R", "FL"),
    CongressMember("Michael Waltz", "House", "R", "FL"),
    CongressMember("Gary Palmer", "House", "R", "AL"),
    CongressMember("Rich McCormick", "House", "R", "GA"),
    CongressMember("Steve Womack", "House", "R", "AR"),
    CongressMember("Diana Harshbarger", "House", "R", "TN"),
    CongressMember("Greg Steube", "House", "R", "FL"),
    CongressMember("Bill Huizenga", "House", "R", "MI"),
    # Democrats - Senate
    CongressMember("Mark Kelly", "Senate", "D", "AZ"),
    CongressMember("Gary Peters", "Senate", "D", "MI"),
    CongressMember("Mark Warner", "Senate", "D", "VA"),
    CongressMember("Sheldon Whitehouse", "Senate", "D", "RI"),
    CongressMember("Jacky Rosen", "Senate", "D", "NV"),
    CongressMember("Debbie Stabenow", "Senate", "D", "MI"),
    CongressMember("Tom Carper", "Senate", "D", "DE"),
    CongressMember("Tina Smith", "Senate", "D", "MN"),
    CongressMember("Jeanne Shaheen", "Senate", "D", "NH"),
    CongressMember("John Hickenlooper", "Senate", "D", "CO"),
    # Republicans - Senate
    CongressMember("Tommy Tuberville", "Senate", "R", "AL"),
    CongressMember("John Hoeven", "Senate", "R", "ND"),
    CongressMember("Roger Wicker", "Senate", "R", "MS"),
    CongressMember("Cynthia Lummis", "Senate", "R", "WY"),
    CongressMember("Bill Hagerty", "Senate", "R", "TN"),
    CongressMember("Markwayne Mullin", "Senate", "R", "OK"),
    CongressMember("John Kennedy", "Senate", "R", "LA"),
    CongressMember("Pete Ricketts", "Senate", "R", "NE"),
    CongressMember("Mike Braun", "Senate", "R", "IN"),
    CongressMember("Tim Scott", "Senate", "R", "SC"),
)

LISTED_STOCKS: Tuple[ListedStock, ...] = (
    ListedStock("NVDA", "NVIDIA Corporation", "Tech"),
    ListedStock("AAPL", "Apple Inc", "Tech"),
    ListedStock("MSFT", "Microsoft Corporation", "Tech"),
    ListedStock("GOOGL", "Alphabet Inc Class A", "Tech"),
    ListedStock("AMZN", "Amazon.com Inc", "Tech"),
    ListedStock("META", "Meta Platforms Inc", "Tech"),
    ListedStock("TSLA", "Tesla Inc", "Tech"),
    ListedStock("AMD", "Advanced Micro Devices", "Tech"),
    ListedStock("CRM", "Salesforce Inc", "Tech"),
    ListedStock("AVGO", "Broadcom Inc", "Tech"),
    ListedStock("ORCL", "Oracle Corporation", "Tech"),
    ListedStock("ADBE", "Adobe Inc", "Tech"),
    ListedStock("INTC", "Intel Corporation", "Tech"),
    ListedStock("QCOM", "Qualcomm Inc", "Tech"),
    ListedStock("NFLX", "Netflix Inc", "Tech"),
    ListedStock("JPM", "JPMorgan Chase & Co", "Finance"),
    ListedStock("BAC", "Bank of America Corp", "Finance"),
    ListedStock("WFC", "Wells Fargo & Co", "Finance"),
    ListedStock("GS", "Goldman Sachs Group", "Finance"),
    ListedStock("MS", "Morgan Stanley", "Finance"),
    ListedStock("BLK", "BlackRock Inc", "Finance"),
    ListedStock("C", "Citigroup Inc", "Finance"),
    ListedStock("V", "Visa Inc", "Finance"),
    ListedStock("MA", "Mastercard Inc", "Finance"),
    ListedStock("AXP", "American Express Co", "Finance"),
    ListedStock("LMT", "Lockheed Martin Corp", "Defense"),
    ListedStock("RTX", "Raytheon Technologies", "Defense"),
    ListedStock("NOC", "Northrop Grumman Corp", "Defense"),
    ListedStock("GD", "General Dynamics Corp", "Defense"),
    ListedStock("BA", "Boeing Company", "Defense"),
    ListedStock("LHX", "L3Harris Technologies", "Defense"),
    ListedStock("JNJ", "Johnson & Johnson", "Healthcare"),
    ListedStock("UNH", "UnitedHealth Group", "Healthcare"),
    ListedStock("PFE", "Pfizer Inc", "Healthcare"),
    ListedStock("MRK", "Merck & Co Inc", "Healthcare"),
    ListedStock("ABBV", "AbbVie Inc", "Healthcare"),
    ListedStock("LLY", "Eli Lilly and Co", "Healthcare"),
    ListedStock("TMO", "Thermo Fisher Scientific", "Healthcare"),
    ListedStock("BMY", "Bristol-Myers Squibb", "Healthcare"),
    ListedStock("XOM", "Exxon Mobil Corp", "Energy"),
    ListedStock("CVX", "Chevron Corporation", "Energy"),
    ListedStock("COP", "ConocoPhillips", "Energy"),
    ListedStock("OXY", "Occidental Petroleum", "Energy"),
    ListedStock("SLB", "Schlumberger Ltd", "Energy"),
    ListedStock("NEE", "NextEra Energy Inc", "Energy"),
    ListedStock("DIS", "Walt Disney Co", "Consumer"),
    ListedStock("NKE", "Nike Inc", "Consumer"),
    ListedStock("SBUX", "Starbucks Corp", "Consumer"),
    ListedStock("MCD", "McDonalds Corp", "Consumer"),
    ListedStock("KO", "Coca-Cola Co", "Consumer"),
    ListedStock("PEP", "PepsiCo Inc", "Consumer"),
    ListedStock("WMT", "Walmart Inc", "Consumer"),
    ListedStock("COST", "Costco Wholesale Corp", "Consumer"),
    ListedStock("HD", "Home Depot Inc", "Consumer"),
    ListedStock("TGT", "Target Corporation", "Consumer"),
)

# STOCK Act disclosure buckets
AMOUNT_RANGES: Tuple[str, ...] = (
    "$1,001 - $15,000",
    "$15,001 - $50,000",
    "$50,001 - $100,000",
    "$100,001 - $250,000",
    "$250,001 - $500,000",
    "$500,001 - $1,000,000",
    "$1,000,001 - $5,000,000",
    "$5,000,001 - $25,000,000",
)


def _notable(member, chamber, party, state, ticker, asset, tx_type, amount, tx_date, disclosed):
    return MappingProxyType({
        "member": member,
        "chamber": chamber,
        "party": party,
        "state": state,
        "ticker": ticker,
        "asset_description": asset,
        "transaction_type": tx_type,
        "amount_range": amount,
        "transaction_date": tx_date,
        "disclosure_date": disclosed,
    })


NOTABLE_CONGRESS_TRADES: Tuple[Mapping[str, str], ...] = (
    _notable("Nancy Pelosi", "House", "D", "CA", "NVDA", "NVIDIA Corporation", "Purchase", "$1,000,001 - $5,000,000", "2024-11-15", "2024-12-01"),
    _notable("Nancy Pelosi", "House", "D", "CA", "GOOGL", "Alphabet Inc Class A", "Purchase", "$500,001 - $1,000,000", "2024-11-10", "2024-11-28"),
    _notable("Nancy Pelosi", "House", "D", "CA", "AAPL", "Apple Inc", "Purchase", "$1,000,001 - $5,000,000", "2024-10-20", "2024-11-05"),
    _notable("Nancy Pelosi", "House", "D", "CA", "TSLA", "Tesla Inc", "Sale", "$500,001 - $1,000,000", "2024-09-15", "2024-10-01"),
    _notable("Tommy Tuberville", "Senate", "R", "AL", "MSFT", "Microsoft Corporation", "Sale", "$50,001 - $100,000", "2024-11-20", "2024-12-05"),
    _notable("Tommy Tuberville", "Senate", "R", "AL", "NVDA", "NVIDIA Corporation", "Purchase", "$250,001 - $500,000", "2024-10-05", "2024-10-25"),
    _notable("Dan Crenshaw", "House", "R", "TX", "AAPL", "Apple Inc", "Purchase", "$15,001 - $50,000", "2024-11-18", "2024-12-02"),
    _notable("Michael McCaul", "House", "R", "TX", "AVGO", "Broadcom Inc", "Purchase", "$250,001 - $500,000", "2024-11-16", "2024-12-01"),
    _notable("Mark Warner", "Senate", "D", "VA", "MSFT", "Microsoft Corporation", "Purchase", "$1,000,001 - $5,000,000", "2024-10-28", "2024-11-15"),
    _notable("Josh Gottheimer", "House", "D", "NJ", "META", "Meta Platforms Inc", "Purchase", "$100,001 - $250,000", "2024-11-12", "2024-11-30"),
)

# CUSIP -> ticker for the most common 13F positions; anything else falls
# back to a CUSIP prefix
CUSIP_TO_TICKER: Mapping[str, str] = MappingProxyType({
    "037833100": "AAPL",
    "594918104": "MSFT",
    "02079K305": "GOOGL",
    "02079K107": "GOOG",
    "30303M102": "META",
    "023135106": "AMZN",
    "67066G104": "NVDA",
    "88160R101": "TSLA",
    "084670702": "BRK.B",
    "46625H100": "JPM",
    "92826C839": "V",
    "254687106": "DIS",
    "478160104": "JNJ",
    "742718109": "PG",
    "931142103": "WMT",
})

CongressSample = Tuple[Mapping[str, str], ...]

DEMO_HOLDINGS_QUARTER = "2024-Q3"
DEMO_HOLDINGS_FILING_DATE = date(2024, 11, 14)

TRACKED_INSTITUTIONS: Tuple[TrackedInstitution, ...] = (
    TrackedInstitution("0001067983", "Berkshire Hathaway", (
        DemoHolding("AAPL", "Apple Inc", 915560382, 157400000000),
        DemoHolding("BAC", "Bank of America", 1032852006, 33800000000),
        DemoHolding("AXP", "American Express", 151610700, 28400000000),
        DemoHolding("KO", "Coca-Cola Co", 400000000, 25200000000),
        DemoHolding("CVX", "Chevron Corp", 118610534, 19200000000),
        DemoHolding("OXY", "Occidental Petroleum", 248018128, 14900000000),
    )),
    TrackedInstitution("0001350694", "Bridgewater Associates", (
        DemoHolding("SPY", "SPDR S&P 500 ETF", 23500000, 11200000000),
        DemoHolding("VWO", "Vanguard Emerging Markets", 145000000, 6300000000),
        DemoHolding("IEMG", "iShares Emerging Markets", 98000000, 4900000000),
        DemoHolding("GLD", "SPDR Gold Trust", 18000000, 3600000000),
        DemoHolding("PG", "Procter & Gamble", 15000000, 2500000000),
    )),
    TrackedInstitution("0001423053", "Citadel Advisors", (
        DemoHolding("NVDA", "NVIDIA Corporation", 8500000, 4200000000),
        DemoHolding("META", "Meta Platforms", 5200000, 2900000000),
        DemoHolding("TSLA", "Tesla Inc", 7800000, 1950000000),
        DemoHolding("AMZN", "Amazon.com", 9500000, 1800000000),
        DemoHolding("GOOGL", "Alphabet Inc", 11000000, 1650000000),
        DemoHolding("MSFT", "Microsoft Corp", 4100000, 1600000000),
    )),
    TrackedInstitution("0001037389", "Renaissance Technologies", (
        DemoHolding("NVDA", "NVIDIA Corporation", 2800000, 1400000000),
        DemoHolding("NOVO", "Novo Nordisk", 9500000, 1100000000),
        DemoHolding("META", "Meta Platforms", 1800000, 1000000000),
        DemoHolding("AAPL", "Apple Inc", 4200000, 950000000),
        DemoHolding("V", "Visa Inc", 3100000, 850000000),
    )),
    TrackedInstitution("0001336528", "Pershing Square Capital", (
        DemoHolding("GOOG", "Alphabet Inc Class C", 6800000, 1020000000),
        DemoHolding("HLT", "Hilton Worldwide", 7200000, 1500000000),
        DemoHolding("CMG", "Chipotle Mexican Grill", 320000, 980000000),
        DemoHolding("LOW", "Lowes Companies", 3800000, 950000000),
        DemoHolding("QSR", "Restaurant Brands Intl", 12000000, 850000000),
    )),
    TrackedInstitution("0001061768", "Soros Fund Management", (
        DemoHolding("RIVN", "Rivian Automotive", 28000000, 420000000),
        DemoHolding("SPOT", "Spotify Technology", 950000, 285000000),
        DemoHolding("SHOP", "Shopify Inc", 2800000, 250000000),
        DemoHolding("SE", "Sea Limited", 3500000, 210000000),
    )),
    TrackedInstitution("0001364940", "BlackRock Inc", (
        DemoHolding("AAPL", "Apple Inc", 1100000000, 189000000000),
        DemoHolding("MSFT", "Microsoft Corp", 750000000, 290000000000),
        DemoHolding("AMZN", "Amazon.com", 180000000, 34000000000),
        DemoHolding("NVDA", "NVIDIA Corporation", 95000000, 47000000000),
        DemoHolding("META", "Meta Platforms", 42000000, 23000000000),
    )),
    TrackedInstitution("0001166559", "Vanguard Group", (
        DemoHolding("AAPL", "Apple Inc", 1350000000, 232000000000),
        DemoHolding("MSFT", "Microsoft Corp", 880000000, 340000000000),
        DemoHolding("GOOGL", "Alphabet Inc", 160000000, 24000000000),
        DemoHolding("AMZN", "Amazon.com", 210000000, 40000000000),
        DemoHolding("TSLA", "Tesla Inc", 125000000, 31000000000),
    )),
    TrackedInstitution("0001535392", "Point72 Asset Management", (
        DemoHolding("MSFT", "Microsoft Corp", 2100000, 810000000),
        DemoHolding("NVDA", "NVIDIA Corporation", 1500000, 750000000),
        DemoHolding("AMZN", "Amazon.com", 3200000, 610000000),
        DemoHolding("GOOGL", "Alphabet Inc", 3800000, 570000000),
        DemoHolding("META", "Meta Platforms", 850000, 475000000),
    )),
    TrackedInstitution("0001167483", "D.E. Shaw & Co", (
        DemoHolding("NVDA", "NVIDIA Corporation", 3200000, 1600000000),
        DemoHolding("MSFT", "Microsoft Corp", 3500000, 1350000000),
        DemoHolding("META", "Meta Platforms", 2100000, 1170000000),
        DemoHolding("GOOGL", "Alphabet Inc", 6500000, 975000000),
        DemoHolding("AMZN", "Amazon.com", 4800000, 915000000),
    )),
    TrackedInstitution("0001364742", "Two Sigma Investments", (
        DemoHolding("AAPL", "Apple Inc", 4500000, 775000000),
        DemoHolding("AMZN", "Amazon.com", 3800000, 725000000),
        DemoHolding("MSFT", "Microsoft Corp", 1800000, 695000000),
        DemoHolding("NVDA", "NVIDIA Corporation", 1200000, 600000000),
        DemoHolding("META", "Meta Platforms", 950000, 530000000),
    )),
    TrackedInstitution("0001061219", "ARK Investment Management", (
        DemoHolding("TSLA", "Tesla Inc", 12500000, 3100000000),
        DemoHolding("COIN", "Coinbase Global", 8500000, 2100000000),
        DemoHolding("ROKU", "Roku Inc", 11000000, 1050000000),
        DemoHolding("SQ", "Block Inc", 9200000, 760000000),
        DemoHolding("PATH", "UiPath Inc", 32000000, 450000000),
        DemoHolding("RBLX", "Roblox Corp", 8500000, 380000000),
    )),
)


DEFAULT_CONGRESS_CONFIG = CongressSampleConfig(
    members=CONGRESS_MEMBERS,
    stocks=LISTED_STOCKS,
    amount_ranges=AMOUNT_RANGES,
    notable_trades=NOTABLE_CONGRESS_TRADES,
)


def generate_congress_sample(
    config: CongressSampleConfig = DEFAULT_CONGRESS_CONFIG,
    rng: Optional[random.Random] = None,
    today: Optional[date] = None
) -> CongressSample:
    """
    Build the synthetic congressional disclosure set.

    Random trades fall within the last `lookback_days`, and each is disclosed
    15-44 days after the transaction. The notable trades come first.

    Args:
        config: Fixture data and generator parameters
        rng: Random source (pass a seeded instance for reproducible output)
        today: Reference date for the lookback window

    Returns:
        Tuple of raw trade mappings in the shape the congress adapter accepts
    """
    rng = rng or random.Random()
    today = today or date.today()

    trades = []
    for _ in range(config.sample_size):
        member = rng.choice(config.members)
        stock = rng.choice(config.stocks)
        transaction_type = "Purchase" if rng.random() < config.purchase_probability else "Sale"
        amount_range = rng.choice(config.amount_ranges)

        transaction_date = today - timedelta(days=rng.randrange(config.lookback_days))
        disclosure_date = transaction_date + timedelta(days=rng.randrange(30) + 15)

        trades.append(MappingProxyType({
            "member": member.member,
            "chamber": member.chamber,
            "party": member.party,
            "state": member.state,
            "ticker": stock.ticker,
            "asset_description": stock.name,
            "transaction_type": transaction_type,
            "amount_range": amount_range,
            "transaction_date": transaction_date.isoformat(),
            "disclosure_date": disclosure_date.isoformat(),
        }))

    return tuple(config.notable_trades) + tuple(trades)
