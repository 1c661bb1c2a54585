"""
Recap - meeting transcript summaries with AI generation, export and email sharing.
"""

__version__ = "0.1.0"
