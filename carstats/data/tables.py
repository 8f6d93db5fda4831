"""Static, hand-curated car statistics shown on the dashboard.

Country totals follow the International Organization of Motor Vehicle
Manufacturers (OICA) figures for 2015-2020. Brand shares are illustrative.
Some keys (America, Nafta, Africa) are regional aggregates with no matching
map polygon; they still count towards the world total, as on the web page.
"""

from dataclasses import dataclass

SOURCE_NAME = "International Organization of Motor Vehicle Manufacturers 2015-2020"
SOURCE_URL = "https://www.oica.net/"

COUNTRY_CARS: dict[str, int] = {
    "Austria": 5_633_525,
    "Belgium": 6_820_078,
    "Bulgaria": 3_385_940,
    "Croatia": 1_940_098,
    "Czechia": 6_931_618,
    "Denmark": 3_147_315,
    "Finland": 3_191_483,
    "France": 45_421_468,
    "Germany": 52_275_833,
    "Greece": 6_491_063,
    "Hungary": 4_515_769,
    "Ireland": 2_672_032,
    "Italy": 44_999_681,
    "Netherlands": 10_248_388,
    "Norway": 3_416_216,
    "Poland": 29_237_555,
    "Portugal": 6_591_000,
    "Romania": 8_517_728,
    "Slovakia": 2_799_302,
    "Spain": 29_707_581,
    "Sweden": 5_637_469,
    "Switzerland": 5_215_771,
    "United Kingdom": 42_403_988,
    "Belarus": 3_724_000,
    "Russia": 56_673_511,
    "Serbia": 2_430_672,
    "Turkey": 18_512_642,
    "Ukraine": 8_450_000,
    "America": 452_977_372,
    "Nafta": 360_911_859,
    "Canada": 26_788_244,
    "Mexico": 45_086_615,
    "United States of America": 289_037_000,
    "Argentina": 14_025_113,
    "Brazil": 45_721_945,
    "Chile": 4_750_551,
    "Colombia": 5_659_794,
    "Ecuador": 2_678_251,
    "Peru": 2_945_462,
    "Venezuela": 4_234_553,
    "Australia": 18_924_450,
    "China": 318_034_467,
    "India": 45_687_000,
    "Indonesia": 21_114_412,
    "Iran": 15_962_671,
    "Iraq": 4_715_435,
    "Israel": 3_540_528,
    "Japan": 76_702_773,
    "Kazakhstan": 4_282_820,
    "Malaysia": 17_748_900,
    "New Zealand": 4_398_977,
    "Pakistan": 4_553_947,
    "Philippines": 4_317_267,
    "South Korea": 23_730_286,
    "Syria": 9_809_540,
    "Taiwan": 8_193_237,
    "Thailand": 19_773_217,
    "United Arab Emirates": 3_181_465,
    "Vietnam": 4_785_415,
    "Africa": 60_556_712,
    "Algeria": 6_239_942,
    "Egypt": 6_918_213,
    "Libya": 3_259_826,
    "Morocco": 4_120_233,
    "Nigeria": 11_605_207,
    "South Africa": 10_338_783,
}

# percent of the world fleet, in legend order
BRAND_SHARES: dict[str, float] = {
    "Toyota": 12.5,
    "Volkswagen": 11.2,
    "Hyundai/Kia": 8.4,
    "GM": 7.8,
    "Ford": 6.1,
    "Honda": 5.5,
    "Nissan": 4.2,
    "Stellantis": 7.0,
    "BYD": 4.8,
    "Tesla": 3.1,
    "Geely": 3.6,
    "Other": 26.0,
}


@dataclass(frozen=True)
class BrandTotal:
    name: str
    value: int
    percent: float


@dataclass(frozen=True)
class WorldTotals:
    total_cars: int
    brands: tuple[BrandTotal, ...]


def world_totals(
    country_cars: dict[str, int] | None = None,
    brand_shares: dict[str, float] | None = None,
) -> WorldTotals:
    """Sum country totals and scale brand percentages to absolute car counts.

    Args:
        country_cars: Country -> cars; defaults to :data:`COUNTRY_CARS`.
        brand_shares: Brand -> percent; defaults to :data:`BRAND_SHARES`.

    Returns:
        WorldTotals with the overall total and one BrandTotal per brand,
        ``value = round(percent / 100 * total)``.
    """
    country_cars = COUNTRY_CARS if country_cars is None else country_cars
    brand_shares = BRAND_SHARES if brand_shares is None else brand_shares
    total = sum(country_cars.values())
    brands = tuple(
        BrandTotal(name=name, value=round(percent / 100 * total), percent=percent)
        for name, percent in brand_shares.items()
    )
    return WorldTotals(total_cars=total, brands=brands)
