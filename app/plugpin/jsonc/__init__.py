"""JSONC scanning, loading and surgical patching.

This module strips comments and trailing commas for strict parsing and
edits a single array entry in raw text without touching anything else.
"""

from plugpin.jsonc.loader import parse_jsonc, read_config, read_jsonc_file
from plugpin.jsonc.patcher import ArraySpan, PatchResult, PatchStatus, locate_array, replace_entry
from plugpin.jsonc.stripper import CharClass, classify, scan_plain_mask, strip_jsonc

__all__ = [
    "ArraySpan",
    "CharClass",
    "PatchResult",
    "PatchStatus",
    "classify",
    "locate_array",
    "parse_jsonc",
    "read_config",
    "read_jsonc_file",
    "replace_entry",
    "scan_plain_mask",
    "strip_jsonc",
]
