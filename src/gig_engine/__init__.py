"""Gig Status Engine: classify, style, and rank gig listings by urgency."""

__version__ = "0.1.0"
