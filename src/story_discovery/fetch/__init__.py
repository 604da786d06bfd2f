from story_discovery.fetch.base import StoryFetcher
from story_discovery.fetch.fanout import FanoutExecutor
from story_discovery.fetch.strapi import DEFAULT_BASE_URL, StrapiFetcher

__all__ = [
    "DEFAULT_BASE_URL",
    "FanoutExecutor",
    "StoryFetcher",
    "StrapiFetcher",
]
