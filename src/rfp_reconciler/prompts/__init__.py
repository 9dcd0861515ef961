"""
LLM prompts for the RFP reconciler.
"""

from .interpret_request import (
    INTERPRET_SYSTEM_PROMPT,
    build_interpret_prompt,
)
from .extract_proposal import (
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_prompt,
)
from .compare_proposals import (
    COMPARISON_SYSTEM_PROMPT,
    build_comparison_prompt,
)

__all__ = [
    'INTERPRET_SYSTEM_PROMPT',
    'build_interpret_prompt',
    'EXTRACTION_SYSTEM_PROMPT',
    'build_extraction_prompt',
    'COMPARISON_SYSTEM_PROMPT',
    'build_comparison_prompt',
]
