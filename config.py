"""
Real Estate Indicators - Centralized Configuration

All environment variables, constants, and settings in one place.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # API Keys
    fred_api_key: Optional[str] = None

    # Where the dashboard reaches the proxy (this server by default)
    api_base_url: str = "http://localhost:4000"

    # Upstream
    fred_base_url: str = "https://api.stlouisfed.org/fred"
    upstream_timeout: float = 15.0

    # Data settings
    observation_window_years: int = 5
    frequency: str = "m"  # monthly

    # Server
    port: int = 4000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            fred_api_key=os.environ.get('FRED_API_KEY') or None,
            api_base_url=os.environ.get('API_BASE_URL', 'http://localhost:4000'),
            upstream_timeout=float(os.environ.get('UPSTREAM_TIMEOUT', 15.0)),
            observation_window_years=int(os.environ.get('OBSERVATION_WINDOW_YEARS', 5)),
            frequency=os.environ.get('OBSERVATION_FREQUENCY', 'm'),
            port=int(os.environ.get('PORT', 4000)),
        )

    def fetcher_config(self):
        """Build the explicit configuration handed to the series fetcher."""
        from sources.base import FetcherConfig

        return FetcherConfig(
            base_url=self.api_base_url,
            observation_window_years=self.observation_window_years,
            frequency=self.frequency,
        )


# Global config instance
config = Config.from_env()


# Real estate FRED series. Keys are the metric names used in every combined
# record; changing a code changes what is reported, not the pipeline.
SERIES_IDS = {
    'priceIndex': 'CSUSHPINSA',         # Case-Shiller Home Price Index
    'inventory': 'MSACSR',              # Monthly Supply of Houses
    'mortgageRate': 'MORTGAGE30US',     # 30-Year Fixed Rate Mortgage
    'constructionSpend': 'TLRESCONS',   # Total Residential Construction
    'bankruptcies': 'BUSLOANS',         # Commercial and Industrial Loans (proxy)
}

METRIC_KEYS = tuple(SERIES_IDS)


# Display catalog for the dashboard cards and chart legend
METRICS = {
    'priceIndex': {'name': 'Price Index', 'color': '#0f766e'},
    'inventory': {'name': 'Inventory (months)', 'color': '#0369a1'},
    'mortgageRate': {'name': 'Mortgage Rate (%)', 'color': '#9333ea'},
    'constructionSpend': {'name': 'Construction Spending', 'color': '#0891b2'},
    'bankruptcies': {'name': 'Business Loans', 'color': '#4f46e5'},
}


# Sample tables shown beside the live series. FRED has no regional or
# segment breakdown for these indicators, so they are fixed and served the
# same way whether the live fetch succeeded or fell back.
REGIONAL_DATA = [
    {'region': 'Northeast', 'priceIndex': 112, 'inventoryMonths': 4.2, 'yearOverYearGrowth': 5.6},
    {'region': 'Midwest', 'priceIndex': 98, 'inventoryMonths': 3.8, 'yearOverYearGrowth': 3.2},
    {'region': 'South', 'priceIndex': 106, 'inventoryMonths': 4.7, 'yearOverYearGrowth': 7.1},
    {'region': 'West', 'priceIndex': 118, 'inventoryMonths': 3.5, 'yearOverYearGrowth': 8.3},
]

MARKET_DATA = {
    'trends': [
        {'quarter': 'Q1 2023', 'residential': 82, 'commercial': 76, 'industrial': 79},
        {'quarter': 'Q2 2023', 'residential': 85, 'commercial': 78, 'industrial': 83},
        {'quarter': 'Q3 2023', 'residential': 89, 'commercial': 81, 'industrial': 86},
        {'quarter': 'Q4 2023', 'residential': 93, 'commercial': 85, 'industrial': 89},
        {'quarter': 'Q1 2024', 'residential': 98, 'commercial': 88, 'industrial': 91},
        {'quarter': 'Q2 2024', 'residential': 103, 'commercial': 92, 'industrial': 94},
    ],
    'segments': [
        {'name': 'Residential', 'value': 45, 'color': '#0891b2'},
        {'name': 'Commercial', 'value': 30, 'color': '#0f766e'},
        {'name': 'Industrial', 'value': 15, 'color': '#4f46e5'},
        {'name': 'Land', 'value': 10, 'color': '#9333ea'},
    ],
}
