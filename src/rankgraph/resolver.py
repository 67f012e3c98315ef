"""Recursive ``%namespace.path%`` placeholder resolution."""
from __future__ import annotations

import logging
import re

logger = logging.getLogger("rankgraph")

TOKEN_RE = re.compile(r"%([^%\s]+)%")

DEFAULT_MAX_DEPTH = 10
DEFAULT_MAX_STEPS = 10_000


def resolve_path(keys: list[str], data):
    """Walk ``data`` along ``keys``; None when any segment is missing."""
    current = data
    for key in keys:
        if isinstance(current, dict) and key in current:
            current = current[key]
        elif isinstance(current, list) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        else:
            return None
    return current


class VariableResolver:
    """Fills placeholders in field values from a render context.

    One resolver serves one render pass. A replacement is rendered again, so
    a placeholder may resolve to further placeholders or to another schema's
    reference. A token met again inside its own expansion, a chain deeper
    than ``max_depth``, or an exhausted ``max_steps`` budget leaves the value
    unresolved.
    """

    def __init__(self, context: dict, max_depth: int = DEFAULT_MAX_DEPTH, max_steps: int = DEFAULT_MAX_STEPS):
        self.context = context
        self.max_depth = max_depth
        self.max_steps = max_steps
        self.steps = 0
        self._budget_warned = False

    def render(self, value):
        """Return ``value`` with every placeholder replaced."""
        return self._render(value, ())

    def _render(self, value, chain: tuple[str, ...]):
        if isinstance(value, dict):
            return {key: self._render(item, chain) for key, item in value.items()}
        if isinstance(value, list):
            return [self._render(item, chain) for item in value]
        if not isinstance(value, str) or "%" not in value:
            return value

        tokens = TOKEN_RE.findall(value)
        if not tokens:
            return value

        cyclic = [t for t in tokens if t in chain]
        if cyclic:
            logger.warning("Placeholder cycle on '%%%s%%'; leaving value unresolved", cyclic[0])
            return value
        if len(chain) >= self.max_depth:
            logger.warning("Placeholder nesting deeper than %d; leaving value unresolved", self.max_depth)
            return value
        if self.steps >= self.max_steps:
            if not self._budget_warned:
                logger.warning("Placeholder step budget of %d exhausted", self.max_steps)
                self._budget_warned = True
            return value
        self.steps += 1

        whole = TOKEN_RE.fullmatch(value)
        if whole:
            token = whole.group(1)
            replacement = resolve_path(token.split("."), self.context)
            if replacement is None:
                return ""
            if isinstance(replacement, (str, dict, list)):
                return self._render(replacement, chain + (token,))
            return replacement

        def substitute(match: re.Match) -> str:
            token = match.group(1)
            replacement = resolve_path(token.split("."), self.context)
            if isinstance(replacement, str):
                replacement = self._render(replacement, chain + (token,))
            if replacement is None or isinstance(replacement, (dict, list)):
                return ""
            return str(replacement)

        return TOKEN_RE.sub(substitute, value)


def render(value, context: dict, max_depth: int = DEFAULT_MAX_DEPTH):
    """Resolve ``value`` against ``context`` with a fresh resolver."""
    return VariableResolver(context, max_depth=max_depth).render(value)
