# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for documentation generation components."""

from docgen.config import GeneratorConfig
from docgen.declaration import Declaration, DeclKey, PlatformVariant
from docgen.parser import ParseFailure
from docgen.pipeline import CombinationResult, DocGenerator, GenerationRequest, RunReport
from docgen.renderer import WriteFailure

__all__ = [
    "CombinationResult",
    "DeclKey",
    "Declaration",
    "DocGenerator",
    "GenerationRequest",
    "GeneratorConfig",
    "ParseFailure",
    "PlatformVariant",
    "RunReport",
    "WriteFailure",
]
