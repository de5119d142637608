"""Tests for the cleanup rule engine and the Hacking with Swift rule set."""

from __future__ import annotations

import logging

from docscout.core.models.cleanup import ExactMatch, LineFilter, RegexRule, SectionBoundary
from docscout.infrastructure.cleanup import HWS_CLEANUP_RULES, CleanupRuleEngine, normalize_whitespace


class TestNormalizeWhitespace:
    def test_strips_trailing_spaces_and_ends_with_newline(self):
        assert normalize_whitespace("a  \nb\t") == "a\nb\n"

    def test_caps_blank_runs_at_two(self):
        assert normalize_whitespace("a\n\n\n\n\nb") == "a\n\n\nb\n"

    def test_empty_input_stays_empty(self):
        assert normalize_whitespace("") == ""
        assert normalize_whitespace(" \n\n ") == ""


class TestCleanupRuleEngine:
    def test_rules_apply_in_order(self):
        engine = CleanupRuleEngine([ExactMatch("abc"), ExactMatch("b")])
        # "abc" goes first, so only the stray "b" is left for the second rule.
        assert engine.clean("xabcx b") == "xx\n"

    def test_clean_is_idempotent(self):
        engine = CleanupRuleEngine(HWS_CLEANUP_RULES)
        text = (
            "Intro line\n\n\n\n"
            "**BUY OUR BOOKS**\n"
            "[Read more](/articles/1)\n"
            "Body paragraph   \n"
            "-\n"
            "Closing"
        )
        once = engine.clean(text)
        assert engine.clean(once) == once

    def test_fixpoint_catches_rules_enabled_by_later_rules(self):
        # Removing "#" only forms "AD" after the literal rule has already run.
        engine = CleanupRuleEngine([ExactMatch("AD"), RegexRule(r"#")])
        assert engine.clean("A#D x") == "x\n"

    def test_end_anchored_rule_runs_to_fixpoint(self):
        # Each pass strips only the last timestamp.
        engine = CleanupRuleEngine([RegexRule(r"\s+\d+[dhm]\s*$")])
        assert engine.clean("Posted 1d 2d 3d 4d 5d") == "Posted\n"

    def test_hws_rules_idempotent_on_many_timestamps(self):
        engine = CleanupRuleEngine(HWS_CLEANUP_RULES)
        text = "Posted " + " ".join(f"{n}h" for n in range(1, 12))
        once = engine.clean(text)
        assert once == "Posted\n"
        assert engine.clean(once) == once

    def test_invalid_rule_is_skipped_and_logged_once(self, caplog):
        engine = CleanupRuleEngine([RegexRule(r"(broken"), ExactMatch("drop me ")])

        with caplog.at_level(logging.WARNING):
            first = engine.clean("drop me keep")
            second = engine.clean("drop me again")

        assert first == "keep\n"
        assert second == "again\n"
        warnings = [r for r in caplog.records if "Skipping cleanup rule #0" in r.getMessage()]
        assert len(warnings) == 1

    def test_empty_rule_list_only_normalizes(self):
        assert CleanupRuleEngine([]).clean("a  \n\n\n\n\nb") == "a\n\n\nb\n"


class TestHWSRules:
    def test_navigation_menu_is_removed(self):
        engine = CleanupRuleEngine(HWS_CLEANUP_RULES)
        text = (
            "- [Forums](/forums)\n"
            "- [Learn](/learn)\n"
            "- [Careers](/careers)\n"
            "- [SUBSCRIBE](/plus)\n"
            "# Real Title\n"
            "Body text"
        )
        assert engine.clean(text) == "# Real Title\nBody text\n"

    def test_related_questions_tail_is_removed(self):
        engine = CleanupRuleEngine(HWS_CLEANUP_RULES)
        text = "# Answer\n\nUse a closure.\n\n## Related questions\n\n- [Other](/interview/1)"
        assert engine.clean(text) == "# Answer\n\nUse a closure.\n"

    def test_promotional_literals_are_removed(self):
        engine = CleanupRuleEngine(HWS_CLEANUP_RULES)
        text = "Start\n\nYou are not logged in\n\n[Log in or create account](/login)\n\nEnd"
        cleaned = engine.clean(text)
        assert "logged in" not in cleaned
        assert "Log in" not in cleaned
        assert cleaned.startswith("Start")
        assert cleaned.endswith("End\n")

    def test_rule_set_compiles(self):
        for rule in HWS_CLEANUP_RULES:
            if isinstance(rule, (RegexRule, LineFilter)):
                rule.compile()
            else:
                assert isinstance(rule, (SectionBoundary, ExactMatch))
