"""Accessibility audits with axe-core.

axe-core is injected into the page under test and run with `axe.run()`.
`AxeScan` mirrors the builder most axe integrations expose: choose tags or
rules, disable rules, include or exclude parts of the page, then analyze.

    results = AxeScan(page).with_tags("wcag2a", "wcag2aa").exclude("#chatbot").analyze()
    assert_no_violations(results)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from playwright.sync_api import Page

logger = logging.getLogger(__name__)

AXE_CDN = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.9.1/axe.min.js"

# WCAG conformance level to axe-core tags
WCAG_TAGS = {
    "A": ["wcag2a", "wcag21a"],
    "AA": ["wcag2a", "wcag2aa", "wcag21a", "wcag21aa"],
    "AAA": ["wcag2a", "wcag2aa", "wcag2aaa", "wcag21a", "wcag21aa"],
}

IMPACTS = ("minor", "moderate", "serious", "critical")

RUN_AXE = "([context, options]) => axe.run(context, options)"


@dataclass
class Violation:
    id: str
    impact: Optional[str]
    description: str
    help: str
    help_url: str
    tags: List[str] = field(default_factory=list)
    nodes: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_axe(cls, raw: Dict[str, Any]) -> "Violation":
        return cls(
            id=raw.get("id", "unknown"),
            impact=raw.get("impact"),
            description=raw.get("description", ""),
            help=raw.get("help", ""),
            help_url=raw.get("helpUrl", ""),
            tags=list(raw.get("tags", [])),
            nodes=list(raw.get("nodes", [])),
        )

    def summary(self) -> str:
        lines = [
            f"{self.id} [{self.impact or 'unknown'}] {self.description}",
            f"  Affected elements: {len(self.nodes)}",
            f"  Help: {self.help_url}",
        ]
        if self.nodes:
            lines.append(f"  Example: {self.nodes[0].get('html', '')[:100]}")
        return "\n".join(lines)


@dataclass
class AxeResults:
    url: str
    violations: List[Violation]
    passes: int = 0
    incomplete: int = 0
    inapplicable: int = 0

    @classmethod
    def from_axe(cls, raw: Dict[str, Any]) -> "AxeResults":
        return cls(
            url=raw.get("url", ""),
            violations=[Violation.from_axe(v) for v in raw.get("violations", [])],
            passes=len(raw.get("passes", [])),
            incomplete=len(raw.get("incomplete", [])),
            inapplicable=len(raw.get("inapplicable", [])),
        )

    def by_impact(self) -> Dict[str, int]:
        counts = {impact: 0 for impact in IMPACTS}
        for violation in self.violations:
            if violation.impact in counts:
                counts[violation.impact] += 1
        return counts

    def at_least(self, impact: str) -> List[Violation]:
        """Violations with the given impact or worse."""
        if impact not in IMPACTS:
            raise ValueError(f"Unknown impact '{impact}', expected one of {IMPACTS}")
        floor = IMPACTS.index(impact)
        return [
            v for v in self.violations
            if v.impact in IMPACTS and IMPACTS.index(v.impact) >= floor
        ]

    def report(self) -> str:
        lines = [f"{len(self.violations)} accessibility violation(s) on {self.url}"]
        for index, violation in enumerate(self.violations, start=1):
            lines.append(f"{index}. {violation.summary()}")
        return "\n".join(lines)


class AccessibilityViolations(AssertionError):
    def __init__(self, results: AxeResults, violations: List[Violation]):
        self.results = results
        self.violations = violations
        super().__init__(
            "\n".join(
                [f"Found {len(violations)} accessibility violation(s) on {results.url}"]
                + [v.summary() for v in violations]
            )
        )


class AxeScan:
    """Builder for one axe-core run against a page."""

    def __init__(self, page: Page, source: Union[str, Path] = AXE_CDN):
        self.page = page
        self.source = source
        self._run_only: Optional[Dict[str, Any]] = None
        self._disabled: List[str] = []
        self._include: List[str] = []
        self._exclude: List[str] = []
        self._extra_options: Dict[str, Any] = {}

    def with_tags(self, *tags: str) -> "AxeScan":
        self._run_only = {"type": "tag", "values": list(tags)}
        return self

    def with_level(self, level: str) -> "AxeScan":
        if level not in WCAG_TAGS:
            raise ValueError(f"Unknown WCAG level '{level}', expected one of {sorted(WCAG_TAGS)}")
        return self.with_tags(*WCAG_TAGS[level])

    def with_rules(self, *rules: str) -> "AxeScan":
        self._run_only = {"type": "rule", "values": list(rules)}
        return self

    def disable_rules(self, *rules: str) -> "AxeScan":
        self._disabled.extend(rules)
        return self

    def include(self, selector: str) -> "AxeScan":
        self._include.append(selector)
        return self

    def exclude(self, selector: str) -> "AxeScan":
        self._exclude.append(selector)
        return self

    def options(self, options: Dict[str, Any]) -> "AxeScan":
        """Raw axe.run options, merged over what the builder produced."""
        self._extra_options.update(options)
        return self

    def build_context(self) -> Any:
        if not self._include and not self._exclude:
            return None
        context: Dict[str, Any] = {}
        if self._include:
            context["include"] = list(self._include)
        if self._exclude:
            context["exclude"] = list(self._exclude)
        return context

    def build_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {}
        if self._run_only:
            options["runOnly"] = dict(self._run_only)
        if self._disabled:
            options["rules"] = {rule: {"enabled": False} for rule in self._disabled}
        for key, value in self._extra_options.items():
            if key == "rules" and "rules" in options:
                options["rules"] = {**options["rules"], **value}
            else:
                options[key] = value
        return options

    def inject(self) -> None:
        if self.page.evaluate("() => typeof window.axe !== 'undefined'"):
            return
        source = str(self.source)
        logger.info("Injecting axe-core from %s", source)
        if source.startswith(("http://", "https://")):
            self.page.add_script_tag(url=source)
        else:
            self.page.add_script_tag(path=source)
        if not self.page.evaluate("() => typeof window.axe !== 'undefined'"):
            raise RuntimeError(f"axe-core failed to load from {source}")

    def analyze(self) -> AxeResults:
        self.inject()
        context = self.build_context()
        options = self.build_options()
        logger.info("Running axe-core context=%s options=%s", context, options)
        raw = self.page.evaluate(RUN_AXE, [context if context is not None else "html", options])
        results = AxeResults.from_axe(raw)
        logger.info(
            "axe-core: %d violations, %d passes, %d incomplete (%s)",
            len(results.violations), results.passes, results.incomplete, results.by_impact()
        )
        return results


def assert_no_violations(results: AxeResults, min_impact: Optional[str] = None) -> None:
    """Fail with a readable report if violations (of min_impact or worse) exist."""
    violations = results.at_least(min_impact) if min_impact else results.violations
    if violations:
        raise AccessibilityViolations(results, violations)
