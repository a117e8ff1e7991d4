"""
Core module - Result type and chaining helpers

This module provides:
- Success / Failure: the two Result variants
- chain: synchronous Result chain
- lift_async: asynchronous Result chain with concurrent fan-out
"""

from auto_translatr.core.result import (
    Success,
    Failure,
    Result,
    is_success,
    is_failure,
    collect,
    gather_results,
    Chain,
    AsyncChain,
    chain,
    lift_async,
)
