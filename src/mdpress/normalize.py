#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Implied-option normalization.

Some settings imply others: a title or stylesheet needs a standalone page,
a standalone page or a table of contents is HTML-only, and a TOC-only run
needs the TOC. :func:`normalize` applies these rules in a fixed order so the
outcome does not depend on where each value came from.

Each rule re-reads the record as left by the previous rules, so a later rule
can fire because of an earlier one (a title turns on ``page``, which then
turns off ``latex``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from mdpress.settings import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImplicationRule:
    """A single ``when -> set field = value`` rule.

    Parameters
    ----------
    name : str
        Short description used in debug logging
    condition : Callable[[Settings], bool]
        Predicate evaluated against the current record
    field_name : str
        Field assigned when the predicate holds
    value : bool
        Value assigned to ``field_name``

    """

    name: str
    condition: Callable[[Settings], bool]
    field_name: str
    value: bool

    def apply(self, settings: Settings) -> bool:
        """Apply the rule in place.

        Returns
        -------
        bool
            True if the record changed

        """
        if not self.condition(settings):
            return False
        if getattr(settings, self.field_name) == self.value:
            return False
        setattr(settings, self.field_name, self.value)
        logger.debug("Implied option: %s (%s=%s)", self.name, self.field_name, self.value)
        return True


IMPLICATION_RULES: tuple[ImplicationRule, ...] = (
    ImplicationRule(
        name="title or css implies page",
        condition=lambda s: s.css != "" or s.title != "",
        field_name="page",
        value=True,
    ),
    ImplicationRule(
        name="page implies no latex",
        condition=lambda s: s.page,
        field_name="latex",
        value=False,
    ),
    ImplicationRule(
        name="toconly implies toc",
        condition=lambda s: s.toc_only,
        field_name="toc",
        value=True,
    ),
    ImplicationRule(
        name="toc implies no latex",
        condition=lambda s: s.toc,
        field_name="latex",
        value=False,
    ),
)


def normalize(settings: Settings) -> Settings:
    """Apply every implication rule once, in order.

    Parameters
    ----------
    settings : Settings
        Record to normalize; modified in place

    Returns
    -------
    Settings
        The same record, for chaining

    """
    for rule in IMPLICATION_RULES:
        rule.apply(settings)
    return settings


__all__ = ["ImplicationRule", "IMPLICATION_RULES", "normalize"]
