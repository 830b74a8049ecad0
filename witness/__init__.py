"""Witness generation modules.

Advisory (hint) computation for the regex circuit. Everything here is plain
host code and is trusted only after the matching module in the constraints
package has re-checked it:

- packed_value: bit decomposition of capture-aware table values
- capture: is_capture flags and the final capture mask
- substring: captured substring and generic subarray selection
"""

from .capture import capture_flags_hint, capture_mask_hint
from .packed_value import decompose_packed_value
from .substring import extract_substring_hint, select_subarray_hint

__all__ = [
    'capture_flags_hint',
    'capture_mask_hint',
    'decompose_packed_value',
    'extract_substring_hint',
    'select_subarray_hint',
]
