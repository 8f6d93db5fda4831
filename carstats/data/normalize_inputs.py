"""Input normalization for map geometry and user-selected options.

Maps geometry property names onto the keys used by the country table, and UI
labels onto the internal chart identifiers used by the image routes.
"""

NAME_KEYS = ("NAME", "name", "ADMIN", "name_long", "formal_en", "BRK_NAME")

COUNTRY_ALIASES = {
    "United States": "United States of America",
    "Korea, South": "South Korea",
    "Russian Federation": "Russia",
    "Congo (Kinshasa)": "Democratic Republic of the Congo",
    "Congo (Brazzaville)": "Republic of the Congo",
    "Czechia": "Czech Republic",
}

CHART_MAP = {
    "Cars by Country": "choropleth",
    "Map": "choropleth",
    "Brand Shares": "brands",
    "Pie": "brands",
    "Brand Output": "final_frame",
    "Final Frame": "final_frame",
}


def normalize_country_name(properties: dict | None) -> str:
    """Pick a display name from geometry properties and apply known aliases.

    Args:
        properties: Feature properties from a Natural Earth style GeoJSON.

    Returns:
        The normalized country name, or "Unknown".
    """
    properties = properties or {}
    name = next((properties[k] for k in NAME_KEYS if properties.get(k)), "Unknown")
    return COUNTRY_ALIASES.get(name, name)


def normalize_inputs(chart: str) -> str:
    """Normalize a chart selection to its internal identifier.

    Args:
        chart: UI label like "Cars by Country", or an internal id.

    Returns:
        "choropleth", "brands", "final_frame", or the input unchanged.
    """
    return CHART_MAP.get(chart, chart)
