from dresswell.services.vision.providers.base import NullVisionProvider, VisionProvider
from dresswell.services.vision.providers.openai import OpenAIVisionProvider

__all__ = ["VisionProvider", "NullVisionProvider", "OpenAIVisionProvider"]
