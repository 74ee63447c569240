"""Derive the column rules that apply to one tab."""

from __future__ import annotations

from ..sheets import Spreadsheet
from ..utils.log import get_logger
from ._cache import SchemaCache
from ._schema import ColumnRuleSet, build_rule_set, meta_rule_set

logger = get_logger("validation.resolver")


def resolve_column_rules(
    cache: SchemaCache,
    spreadsheet: Spreadsheet,
    tab_name: str,
) -> ColumnRuleSet | None:
    """Return the rules for ``tab_name``, or ``None`` when validation is skipped.

    The config tab is described by the hardcoded meta-schema and never goes
    through the cache. ``None`` means "skipped, not failed": the spreadsheet
    has no config tab, or the config tab does not list ``tab_name``.
    """
    if tab_name == cache.config_tab_name:
        return meta_rule_set(cache.config_tab_name)

    entry = cache.get(spreadsheet)
    if not entry.has_config:
        logger.info(
            'Skipping data type validation of "%s" because "%s" has no "%s" tab',
            tab_name,
            spreadsheet.name,
            cache.config_tab_name,
        )
        return None

    rules = build_rule_set(entry.records, tab_name)
    if not rules:
        logger.info(
            'Skipping data type validation of "%s" because it is not listed in the "%s" tab',
            tab_name,
            cache.config_tab_name,
        )
        return None
    return rules
