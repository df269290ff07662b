"""Content core – prompts, completion parsing, JSON repair, normalization, generation."""

from one_take_studio.content.generator import ContentGenerator, parse_analysis, parse_artifacts

__all__ = ["ContentGenerator", "parse_analysis", "parse_artifacts"]
