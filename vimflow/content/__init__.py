"""
Exercise content.

Chapter files are parsed by the content loader elsewhere; this package ships
the built-in sample chapter and compiles it through compile_exercise().
"""

from .samples import SAMPLE_CHAPTER, Chapter, load_sample_chapter

__all__ = ["SAMPLE_CHAPTER", "Chapter", "load_sample_chapter"]
