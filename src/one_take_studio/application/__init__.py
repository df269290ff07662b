from one_take_studio.application.newsletter import send_newsletter
from one_take_studio.application.pipeline import StudioPipeline

__all__ = ["StudioPipeline", "send_newsletter"]
