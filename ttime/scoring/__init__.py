"""Rating contract, registry, plugin loader and weighted aggregation."""

from ttime.scoring.aggregate import RankedSchedule, WeightedAggregator
from ttime.scoring.base import AbstractRating, RatingDescriptor
from ttime.scoring.loader import PluginLoader, discover_ratings, rating_path_candidates
from ttime.scoring.registry import RatingFactory, RatingRegistry, RatingSlot

__all__ = [
    "AbstractRating",
    "PluginLoader",
    "RankedSchedule",
    "RatingDescriptor",
    "RatingFactory",
    "RatingRegistry",
    "RatingSlot",
    "WeightedAggregator",
    "discover_ratings",
    "rating_path_candidates",
]
