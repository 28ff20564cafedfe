"""Audience overlap coefficients for unique reach estimation.

The overlap factor is a heuristic multiplier (< 1) applied to summed channel
audiences to approximate deduplicated reach. It is chosen from the package's
composition, not measured.
"""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from adpackage.domain.models import PublicationSelection


class OverlapConfig(BaseModel):
    """Overlap coefficients by package composition.

    Attributes:
        single_pub_multi_channel: One outlet across several of its own channels
            (~40% duplicate audience).
        multi_pub_same_geo: Several outlets in one market (~25% duplicate).
        multi_pub_diff_geo: Several outlets across distinct markets (~10% duplicate).
        default: Anything else, e.g. a single channel (~30% duplicate).
    """

    model_config = ConfigDict(frozen=True)

    single_pub_multi_channel: float = Field(default=0.60, gt=0, le=1)
    multi_pub_same_geo: float = Field(default=0.75, gt=0, le=1)
    multi_pub_diff_geo: float = Field(default=0.90, gt=0, le=1)
    default: float = Field(default=0.70, gt=0, le=1)


DEFAULT_OVERLAP_CONFIG = OverlapConfig()


def _spans_distinct_geographies(publications: Sequence[PublicationSelection]) -> bool:
    """True when every publication names a market and at least two differ."""
    geographies = [(pub.geography or "").strip().lower() for pub in publications]
    if not all(geographies):
        return False
    return len(set(geographies)) > 1


def select_overlap_factor(
    publications: Sequence[PublicationSelection],
    channels_count: int,
    config: OverlapConfig = DEFAULT_OVERLAP_CONFIG,
) -> float:
    """Pick the overlap coefficient for a package composition.

    Rules, in order:
    1. One publication with more than one channel: ``single_pub_multi_channel``.
    2. Several publications all tagged with a geography, spanning more than
       one: ``multi_pub_diff_geo``.
    3. Several publications otherwise: ``multi_pub_same_geo``.
    4. Anything else: ``default``.

    Args:
        publications: The selected publications.
        channels_count: Distinct channels across non-excluded items.
        config: The overlap coefficients.

    Returns:
        The overlap factor.
    """
    if len(publications) == 1 and channels_count > 1:
        return config.single_pub_multi_channel
    if len(publications) > 1:
        if _spans_distinct_geographies(publications):
            return config.multi_pub_diff_geo
        return config.multi_pub_same_geo
    return config.default
