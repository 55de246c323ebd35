"""Fetching statistics on the sales of Mojang's games."""

import logging
from typing import Optional

import aiohttp
from pydantic import BaseModel

from minecraft_utils.config import ApiConfig
from minecraft_utils.models import Stats
from minecraft_utils.mojang_api.client import post

logger = logging.getLogger(__name__)

STATISTICS_PATH = "/orders/statistics"

# Option name -> metric key understood by the statistics endpoint
METRIC_KEYS = {
    "minecraft_items_sold": "item_sold_minecraft",
    "minecraft_prepaid_cards_redeemed": "prepaid_card_redeemed_minecraft",
    "cobalt_items_sold": "item_sold_cobalt",
    "cobalt_prepaid_cards_redeemed": "prepaid_card_redeemed_cobalt",
    "scrolls_items_sold": "item_sold_scrolls",
    "dungeons_items_sold": "item_sold_dungeons",
}


class Metrics(BaseModel):
    """Which sales metrics to combine in a statistics request."""

    minecraft_items_sold: bool = False
    minecraft_prepaid_cards_redeemed: bool = False
    cobalt_items_sold: bool = False
    cobalt_prepaid_cards_redeemed: bool = False
    scrolls_items_sold: bool = False
    dungeons_items_sold: bool = False

    @classmethod
    def minecraft(cls) -> "Metrics":
        """Minecraft items sold and prepaid cards redeemed."""
        return cls(minecraft_items_sold=True, minecraft_prepaid_cards_redeemed=True)

    @classmethod
    def cobalt(cls) -> "Metrics":
        """Cobalt items sold and prepaid cards redeemed."""
        return cls(cobalt_items_sold=True, cobalt_prepaid_cards_redeemed=True)

    @classmethod
    def scrolls(cls) -> "Metrics":
        return cls(scrolls_items_sold=True)

    @classmethod
    def dungeons(cls) -> "Metrics":
        return cls(dungeons_items_sold=True)

    @classmethod
    def all(cls) -> "Metrics":
        return cls(**{name: True for name in METRIC_KEYS})

    @classmethod
    def from_names(cls, names: list[str]) -> "Metrics":
        """Build from option names, e.g. ``["scrolls_items_sold"]``."""
        unknown = [name for name in names if name not in METRIC_KEYS]
        if unknown:
            raise ValueError(f"Unknown metrics: {', '.join(unknown)}")
        return cls(**{name: True for name in names})

    def __or__(self, other: "Metrics") -> "Metrics":
        return Metrics(
            **{name: getattr(self, name) or getattr(other, name) for name in METRIC_KEYS}
        )

    def keys(self) -> list[str]:
        """Return the API metric keys of the selected options."""
        return [key for name, key in METRIC_KEYS.items() if getattr(self, name)]


async def fetch_stats(
    metrics: Metrics,
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> Stats:
    """Get combined sales statistics for the selected metrics."""
    keys = metrics.keys()
    if not keys:
        raise ValueError("At least one metric must be selected")

    api = api or ApiConfig()
    url = api.api_url(STATISTICS_PATH)
    logger.debug(f"Requesting statistics for {keys}")
    response = await post(
        url,
        {"metricKeys": keys},
        session=session,
        timeout=api.timeout,
        user_agent=api.user_agent,
    )
    return Stats.model_validate(response.json())
