from story_discovery.pipeline.engine import DiscoveryEngine

__all__ = ["DiscoveryEngine"]
