"""Regex filters over branch display names.

Patterns are searched (not anchored) in the display form, so ``feature``
matches ``feature/x`` and ``remotes/origin/feature``. Use ``^`` to anchor.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from bselect.errors import InvalidPattern
from bselect.models import Branch


def compile_filters(patterns: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile every pattern, failing on the first invalid one.

    Raises:
        InvalidPattern: With the offending pattern and the parser message.
    """
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidPattern(f"invalid pattern '{pattern}': {exc}", pattern=pattern) from exc
    return compiled


def matches_regex(branch: Branch, patterns: Sequence[re.Pattern[str]]) -> bool:
    """True if no patterns are given or any pattern matches the display form."""
    if not patterns:
        return True
    display = branch.display()
    return any(pattern.search(display) for pattern in patterns)
