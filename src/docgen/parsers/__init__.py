# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Parser package for the documentation generator."""

from docgen.parsers.golang import GoSourceParser

__all__ = ["GoSourceParser"]
