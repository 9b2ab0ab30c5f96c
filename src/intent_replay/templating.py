"""
Variable substitution for ``{{NAME}}`` placeholders.

Values are substituted in a single pass: a substituted value is never
rescanned, so a value that itself looks like ``{{OTHER}}`` stays literal.
Unknown names are left untouched, which keeps substitution idempotent.

Example:
    >>> substitute("Hello {{NAME}}", {"NAME": "Ada"})
    'Hello Ada'
    >>> Substitutor(["EMAIL"]).apply("fill {{EMAIL}} {{X}}", {"EMAIL": "a@b.com"})
    'fill a@b.com {{X}}'
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Pattern

from intent_replay.exceptions import TemplatingError

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def find_placeholders(text: Optional[str]) -> List[str]:
    """Placeholder names in order of first appearance."""
    if not text:
        return []
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(text)))


def substitute(template: Optional[str], variables: Mapping[str, str]) -> str:
    """
    Replace every ``{{KEY}}`` whose KEY is in ``variables``.

    Args:
        template: Text containing placeholders (None is treated as "")
        variables: Flat name -> value map

    Returns:
        The substituted text
    """
    if not template:
        return ""

    def _replace(match: "re.Match[str]") -> str:
        key = match.group(1)
        if key in variables:
            return str(variables[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


class Substitutor:
    """
    Substitution bound to a spec's declared parameter names.

    The pattern is compiled once from ``params``; names outside ``params``
    are never touched, even when ``variables`` happens to contain them.
    """

    def __init__(self, params: Iterable[str]):
        self._params: List[str] = list(dict.fromkeys(params))
        self._pattern: Optional[Pattern[str]] = None
        if self._params:
            names = "|".join(re.escape(p) for p in sorted(self._params, key=len, reverse=True))
            self._pattern = re.compile(r"\{\{\s*(" + names + r")\s*\}\}")

    @property
    def params(self) -> List[str]:
        return list(self._params)

    def missing(self, variables: Mapping[str, str]) -> List[str]:
        """Declared params without a value."""
        return [p for p in self._params if p not in variables]

    def check_resolved(self, variables: Mapping[str, str]) -> None:
        """
        Raise if any declared param has no value.

        Raises:
            TemplatingError: listing every missing name
        """
        missing = self.missing(variables)
        if missing:
            raise TemplatingError("Unresolved placeholders", missing)

    def apply(self, template: Optional[str], variables: Mapping[str, str]) -> str:
        """Substitute declared params in ``template``."""
        if not template:
            return ""
        if self._pattern is None:
            return template
        return self._pattern.sub(
            lambda m: str(variables[m.group(1)]) if m.group(1) in variables else m.group(0),
            template,
        )

    def bind(self, variables: Mapping[str, str]) -> "BoundSubstitutor":
        """Fix the variable map for one run."""
        return BoundSubstitutor(self, dict(variables))


class BoundSubstitutor:
    """A ``Substitutor`` with its run's variables attached."""

    def __init__(self, substitutor: Substitutor, variables: Dict[str, str]):
        self._substitutor = substitutor
        self._variables = variables

    def __call__(self, template: Optional[str]) -> str:
        return self._substitutor.apply(template, self._variables)
