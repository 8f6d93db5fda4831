"""Process-wide caches for visuals.

Map geometry is downloaded once per source and reused for every request.
"""

geometry_cache: dict[str, dict] = {}
