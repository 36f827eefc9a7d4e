"""Declarative moderation rule table.

Rules live in YAML so they can be audited and swapped without touching the
classifier. A rule file has two top-level keys::

    rules:
      - label: url
        tier: restricted        # or ``hard_block: true``
        pattern: 'https?://'
    reserved_names:
      - admin

Rule order is significant: within a tier the first matching rule wins.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from inkwell.errors import RuleConfigError
from inkwell.moderation.models import ModerationRule, RuleTier

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(__file__).with_name("default_rules.yaml")

VALID_TIERS = {t.value for t in RuleTier}


@dataclass(frozen=True)
class RuleSet:
    """Ordered moderation rules plus the reserved display-name terms."""

    rules: tuple[ModerationRule, ...] = ()
    reserved_names: tuple[str, ...] = ()
    source: str = ""

    @property
    def restricted(self) -> tuple[ModerationRule, ...]:
        return tuple(r for r in self.rules if r.tier is RuleTier.RESTRICTED)

    @property
    def moderated(self) -> tuple[ModerationRule, ...]:
        return tuple(r for r in self.rules if r.tier is RuleTier.MODERATED)

    def get(self, label: str) -> ModerationRule | None:
        for rule in self.rules:
            if rule.label == label:
                return rule
        return None


def validate_rules(data: Any) -> list[str]:
    """Check a parsed rule file for structural problems.

    Returns a list of issues. Empty list means the data can be loaded.
    """
    if not isinstance(data, dict):
        return ["Rule file must be a mapping with a 'rules' key"]

    issues: list[str] = []
    rules = data.get("rules")
    if not isinstance(rules, list) or not rules:
        issues.append("No rules defined: 'rules' must be a non-empty list")
        rules = []

    seen: set[str] = set()
    for i, entry in enumerate(rules):
        where = f"Rule {i + 1}"
        if not isinstance(entry, dict):
            issues.append(f"{where} must be a mapping")
            continue

        label = entry.get("label")
        if not label or not isinstance(label, str):
            issues.append(f"{where} missing 'label'")
        elif label in seen:
            issues.append(f"{where} duplicate label '{label}'")
        else:
            seen.add(label)
            where = f"Rule '{label}'"

        pattern = entry.get("pattern")
        if not pattern or not isinstance(pattern, str):
            issues.append(f"{where} missing 'pattern'")
        else:
            try:
                re.compile(pattern)
            except re.error as e:
                issues.append(f"{where} has an invalid pattern: {e}")

        if "tier" in entry:
            if entry["tier"] not in VALID_TIERS:
                issues.append(
                    f"{where} invalid tier '{entry['tier']}'. Must be one of: {sorted(VALID_TIERS)}"
                )
        elif not isinstance(entry.get("hard_block"), bool):
            issues.append(f"{where} needs a 'tier' or a boolean 'hard_block'")

    reserved = data.get("reserved_names", [])
    if not isinstance(reserved, list):
        issues.append("'reserved_names' must be a list")
    else:
        for i, name in enumerate(reserved):
            if not isinstance(name, str) or not name.strip():
                issues.append(f"Reserved name {i + 1} must be a non-empty string")

    return issues


def build_rule_set(data: dict[str, Any], source: str = "") -> RuleSet:
    """Turn validated rule-file data into a RuleSet."""
    issues = validate_rules(data)
    if issues:
        raise RuleConfigError(issues)

    rules = []
    for entry in data["rules"]:
        if "tier" in entry:
            tier = RuleTier(entry["tier"])
        else:
            tier = RuleTier.RESTRICTED if entry["hard_block"] else RuleTier.MODERATED
        rules.append(
            ModerationRule(
                label=entry["label"],
                pattern=entry["pattern"],
                tier=tier,
                description=entry.get("description", ""),
            )
        )

    reserved = tuple(n.strip().lower() for n in data.get("reserved_names", []))
    return RuleSet(rules=tuple(rules), reserved_names=reserved, source=source)


def load_rules(path: str | Path | None = None) -> RuleSet:
    """Load a rule file.

    Resolution order: explicit ``path``, then ``INKWELL_RULES_FILE``, then the
    packaged defaults.
    """
    resolved = Path(path or os.environ.get("INKWELL_RULES_FILE") or DEFAULT_RULES_PATH)
    try:
        with open(resolved, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise RuleConfigError([f"Cannot read rule file {resolved}: {e}"]) from e
    except yaml.YAMLError as e:
        raise RuleConfigError([f"Invalid YAML in {resolved}: {e}"]) from e

    rule_set = build_rule_set(data, source=str(resolved))
    logger.debug(
        "Loaded %d moderation rules (%d restricted) from %s",
        len(rule_set.rules),
        len(rule_set.restricted),
        resolved,
    )
    return rule_set


_default: RuleSet | None = None


def default_rules() -> RuleSet:
    """Return the packaged rule set, loaded once."""
    global _default
    if _default is None:
        _default = build_rule_set(
            yaml.safe_load(DEFAULT_RULES_PATH.read_text(encoding="utf-8")),
            source=str(DEFAULT_RULES_PATH),
        )
    return _default
