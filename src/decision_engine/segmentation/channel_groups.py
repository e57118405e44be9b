"""
Channel Groups
==============

Static and behavioral channel segments. Static groups have fixed membership;
behavioral groups are recomputed from a channel-score snapshot, which is
always the source of truth for their membership.

Refresh Rules:
- **high-performers**: top quartile by score (ceil(n / 4) channels)
- **underperformers**: bottom quartile by score (ceil(n / 4) channels)
- **growing**: always empty here; trend detection needs a historical score
  series that the caller supplies separately

Example Usage:
--------------
>>> from decision_engine.segmentation import channel_groups
>>>
>>> groups = channel_groups.default_groups()
>>> refreshed = channel_groups.refresh_behavioral_groups(
...     {"email": 85, "linkedin": 72, "sms": 45, "tiktok": 30}
... )
>>> refreshed["high-performers"]
['email']
>>> groups = channel_groups.apply_refresh(groups, refreshed)
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from decision_engine.exceptions import PreconditionError
from decision_engine.logging_config import get_logger

logger = get_logger("channel_groups")

SUPPORTED_CHANNELS: Tuple[str, ...] = (
    "email", "sms", "voice", "whatsapp", "linkedin", "facebook",
    "instagram", "tiktok", "youtube", "vimeo", "video",
)

HIGH_PERFORMERS = "high-performers"
UNDERPERFORMERS = "underperformers"
GROWING = "growing"

QUARTILE = 0.25


class GroupKind(str, Enum):
    STATIC = "static"
    BEHAVIORAL = "behavioral"
    AUDIENCE = "audience"


@dataclass(frozen=True)
class PercentileCriteria:
    """Membership by score percentile, e.g. above the 75th."""
    metric: str
    threshold: float
    comparison: Literal["above", "below"]
    method: Literal["percentile"] = "percentile"


@dataclass(frozen=True)
class TrendCriteria:
    """Membership by score trend over a trailing window."""
    metric: str
    direction: Literal["positive", "negative"]
    window_days: int
    method: Literal["trend"] = "trend"


@dataclass(frozen=True)
class AudienceCriteria:
    """Membership resolved from an external audience segment."""
    segment_id: str
    filters: Mapping[str, str] = field(default_factory=dict)
    method: Literal["audience"] = "audience"


SelectionCriteria = Union[PercentileCriteria, TrendCriteria, AudienceCriteria]


@dataclass(frozen=True)
class ChannelGroup:
    """Named set of channels plus the rule that selects them."""
    name: str
    kind: GroupKind
    members: Tuple[str, ...] = ()
    criteria: Optional[SelectionCriteria] = None
    auto_refresh: bool = False


def default_groups() -> List[ChannelGroup]:
    """
    Built-in group catalogue.

    Returns
    -------
    list of ChannelGroup
        Four static groups over the supported channels, followed by the
        behavioral groups ``high-performers``, ``underperformers`` and
        ``growing`` with empty membership and ``auto_refresh=True``.
    """
    return [
        ChannelGroup("all-channels", GroupKind.STATIC, SUPPORTED_CHANNELS),
        ChannelGroup("social", GroupKind.STATIC, ("linkedin", "facebook", "instagram", "tiktok")),
        ChannelGroup("video", GroupKind.STATIC, ("tiktok", "youtube", "vimeo", "video")),
        ChannelGroup("direct-messaging", GroupKind.STATIC, ("email", "sms", "whatsapp", "voice")),
        ChannelGroup(
            HIGH_PERFORMERS, GroupKind.BEHAVIORAL, auto_refresh=True,
            criteria=PercentileCriteria("engagement_score", threshold=75, comparison="above"),
        ),
        ChannelGroup(
            UNDERPERFORMERS, GroupKind.BEHAVIORAL, auto_refresh=True,
            criteria=PercentileCriteria("engagement_score", threshold=25, comparison="below"),
        ),
        ChannelGroup(
            GROWING, GroupKind.BEHAVIORAL, auto_refresh=True,
            criteria=TrendCriteria("engagement_score", direction="positive", window_days=28),
        ),
    ]


def resolve_members(group: ChannelGroup) -> List[str]:
    """
    Current members of a group.

    Reads only: behavioral groups return whatever membership was last
    applied via ``apply_refresh``.
    """
    return list(group.members)


def refresh_behavioral_groups(scores: Mapping[str, float]) -> Dict[str, List[str]]:
    """
    Recompute behavioral group membership from a score snapshot.

    Parameters
    ----------
    scores : mapping of str to float
        Channel identifier -> performance score (larger is better)

    Returns
    -------
    dict
        Dictionary with keys:
        - high-performers: top ceil(n/4) channels, highest score first
        - underperformers: last ceil(n/4) channels of the descending ranking,
          in that same descending order
        - growing: always an empty list

    Notes
    -----
    - Ranking is a stable sort: equal scores keep input order
    - For very small n the two quartiles can overlap (n=1 puts the single
      channel in both groups)

    Example
    -------
    >>> refresh_behavioral_groups({"email": 85, "sms": 45})
    {'high-performers': ['email'], 'underperformers': ['sms'], 'growing': []}
    """
    for channel, score in scores.items():
        if not math.isfinite(score):
            raise PreconditionError(f"Score for channel '{channel}' must be finite, got {score}")

    ranked = [channel for channel, _ in sorted(scores.items(), key=lambda item: -item[1])]
    count = len(ranked)
    top_count = math.ceil(count * QUARTILE)
    bottom_count = math.ceil(count * QUARTILE)

    refreshed = {
        HIGH_PERFORMERS: ranked[:top_count],
        UNDERPERFORMERS: ranked[count - bottom_count:],
        GROWING: [],
    }

    logger.debug(
        "behavioral_groups_refreshed",
        channels=count,
        high_performers=len(refreshed[HIGH_PERFORMERS]),
        underperformers=len(refreshed[UNDERPERFORMERS]),
    )
    return refreshed


def apply_refresh(
    groups: Sequence[ChannelGroup],
    refreshed: Mapping[str, Sequence[str]],
) -> List[ChannelGroup]:
    """
    Copy ``groups`` with behavioral membership replaced by ``refreshed``.

    Static and audience groups, and behavioral groups absent from
    ``refreshed``, are returned unchanged.
    """
    updated = []
    for group in groups:
        if group.kind is GroupKind.BEHAVIORAL and group.name in refreshed:
            group = replace(group, members=tuple(refreshed[group.name]))
        updated.append(group)
    return updated
