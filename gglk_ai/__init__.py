"""GGLK AI - outfit-of-the-day evaluation with a multimodal LLM."""

__version__ = "0.1.0"
