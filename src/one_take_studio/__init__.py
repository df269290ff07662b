"""
One-Take Studio – turn one recording into a week of content.

Transcribe an audio/video file, analyze the transcript for its spiciest
moments, then generate TikTok scripts, Twitter threads, LinkedIn posts and a
newsletter from it:
  from one_take_studio.application.pipeline import StudioPipeline
  from one_take_studio.adapters import default_adapters
  pipeline = StudioPipeline.from_adapters(**default_adapters())
  result = asyncio.run(pipeline.process_url("https://example.com/talk.mp3"))

For a different LLM or speech provider: implement the ports
(ICompletionTransport, ISpeechToText) and inject them.
"""

__version__ = "0.3.0"
