"""Source-agnostic serial/label contrast engine.

This package intentionally contains only domain logic:
- Inputs are two raw strings plus a RuleSet loaded from a rules document.
- No audio, log-file, or UI calls live here; callers react to ContrastResult.
"""

from .engine import classify, contrast, contrast_with, extract, extract_detail
from .errors import (
    InvalidSectionError,
    MissingSectionError,
    RuleCompileError,
    RuleSetError,
    RuleSourceError,
)
from .loader import load, load_document, load_path, write_default_rules
from .models import (
    Channel,
    ContrastResult,
    Extraction,
    ExtractionSource,
    Outcome,
    PatternRule,
    RuleSet,
)
from .normalize import normalize
from .snapshot import RuleSetHolder
