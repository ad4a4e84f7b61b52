"""Tests for argument-vector validation rules."""

from __future__ import annotations

import re

import pytest

from safe_unix.core.errors import PolicyViolationError
from safe_unix.policy.rules import (
    FirstOperandIn,
    FlagAllowlist,
    LeadingFlag,
    MaxOperands,
    NoArguments,
    NoOperands,
    OperandPattern,
    OperandsRequireFlag,
    PrefixDenylist,
    RequireFlag,
    SubcommandAllowlist,
    TokenDenylist,
    drop_long_options,
    is_flag,
    operands,
)


class TestHelpers:
    """Tests for token classification helpers."""

    def test_lone_dash_is_not_a_flag(self) -> None:
        assert not is_flag("-")
        assert is_flag("-l")
        assert is_flag("--long")
        assert not is_flag("file.txt")

    def test_operands_skip_flag_values(self) -> None:
        found = operands(["-n", "5", "a.txt", "-v", "b.txt"], frozenset({"-n"}))

        assert found == ["a.txt", "b.txt"]

    def test_operands_after_end_of_options(self) -> None:
        found = operands(["-l", "--", "-weird-name", "x"])

        assert found == ["-weird-name", "x"]

    def test_drop_long_options(self) -> None:
        assert drop_long_options(["-L", "--printf=%n", "f", "--format"]) == ["-L", "f"]


class TestFlagAllowlist:
    """Tests for FlagAllowlist."""

    def test_accepts_declared_flags_and_operands(self) -> None:
        rule = FlagAllowlist(flags=frozenset({"-l", "-a"}))

        rule.check(["-l", "-a", "some/dir", "-"])

    def test_rejects_undeclared_flag(self) -> None:
        rule = FlagAllowlist(flags=frozenset({"-l", "-R"}))

        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["-R", "--unsafe-flag"])

        assert exc_info.value.token == "--unsafe-flag"
        assert "--unsafe-flag" in exc_info.value.message

    def test_prefix_admits_attached_values(self) -> None:
        rule = FlagAllowlist(flags=frozenset(), prefixes=("--lines=",))

        rule.check(["--lines=5"])
        with pytest.raises(PolicyViolationError):
            rule.check(["--line"])

    def test_clusters_are_not_expanded(self) -> None:
        rule = FlagAllowlist(flags=frozenset({"-l", "-a"}))

        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["-al"])

        assert exc_info.value.token == "-al"

    def test_end_of_options_marker_passes(self) -> None:
        rule = FlagAllowlist(flags=frozenset())

        rule.check(["--", "file"])


class TestTokenDenylist:
    """Tests for TokenDenylist."""

    @pytest.mark.parametrize(
        "args",
        [
            ["-exec", "rm", "{}", ";"],
            [".", "-name", "x", "-delete"],
            [".", "-type", "f", "-execdir", "sh"],
        ],
    )
    def test_rejects_token_at_any_position(self, args: list[str]) -> None:
        rule = TokenDenylist(tokens=frozenset({"-exec", "-execdir", "-delete"}))

        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(args)

        assert exc_info.value.token in {"-exec", "-execdir", "-delete"}

    def test_match_is_case_sensitive(self) -> None:
        rule = TokenDenylist(tokens=frozenset({"-delete"}))

        rule.check(["-DELETE"])


class TestPrefixDenylist:
    """Tests for PrefixDenylist."""

    def test_rejects_prefixed_token(self) -> None:
        rule = PrefixDenylist(prefixes=("-i", "--in-place="), reason="in-place edit")

        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["-n", "-i.bak"])

        assert exc_info.value.token == "-i.bak"
        assert exc_info.value.message.startswith("in-place edit")


class TestRequireFlag:
    """Tests for RequireFlag."""

    def test_accepts_when_present(self) -> None:
        RequireFlag(any_of=("-l",), message="needs -l").check(["-l", "a.zip"])

    def test_rejects_when_absent(self) -> None:
        rule = RequireFlag(any_of=("-l",), message="needs -l")

        with pytest.raises(PolicyViolationError, match="needs -l"):
            rule.check(["a.zip"])


class TestSubcommandAllowlist:
    """Tests for SubcommandAllowlist."""

    def _rule(self) -> SubcommandAllowlist:
        return SubcommandAllowlist(
            label="git",
            subcommands={
                "status": (),
                "branch": (OperandsRequireFlag(any_of=("--list",), label="git branch"),),
            },
        )

    def test_accepts_enumerated_subcommand(self) -> None:
        self._rule().check(["status", "--short"])

    @pytest.mark.parametrize("args", [["push"], ["commit", "-m", "x"], []])
    def test_rejects_other_subcommands(self, args: list[str]) -> None:
        with pytest.raises(PolicyViolationError, match="git subcommand not allowed"):
            self._rule().check(args)

    def test_applies_nested_rules_to_remaining_args(self) -> None:
        rule = self._rule()

        rule.check(["branch", "--list", "feat*"])
        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["branch", "new-branch"])

        assert exc_info.value.token == "new-branch"


class TestStructuralRules:
    """Tests for operand-shape preconditions."""

    def test_first_operand_in(self) -> None:
        rule = FirstOperandIn(values=frozenset({"list", "show"}), label="remote")

        rule.check(["-v"])
        rule.check(["show", "origin"])
        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["add", "x", "url"])

        assert exc_info.value.token == "add"

    def test_leading_flag(self) -> None:
        rule = LeadingFlag(label="tar")

        rule.check([])
        rule.check(["-tf", "a.tar"])
        with pytest.raises(PolicyViolationError):
            rule.check(["xf", "a.tar"])

    def test_no_arguments(self) -> None:
        rule = NoArguments(label="pwd")

        rule.check([])
        with pytest.raises(PolicyViolationError):
            rule.check(["-P"])

    def test_no_operands(self) -> None:
        rule = NoOperands(label="env", reason="operands run programs")

        rule.check(["-0"])
        with pytest.raises(PolicyViolationError, match="operands run programs"):
            rule.check(["sh"])

    def test_max_operands_counts_flag_values_separately(self) -> None:
        rule = MaxOperands(limit=1, label="uniq", value_flags=frozenset({"-f"}))

        rule.check(["-f", "2", "input.txt"])
        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["input.txt", "output.txt"])

        assert exc_info.value.token == "output.txt"

    def test_operand_pattern(self) -> None:
        rule = OperandPattern(pattern=re.compile(r"\+.*"), reason="format only")

        rule.check(["-u", "+%Y-%m-%d"])
        with pytest.raises(PolicyViolationError) as exc_info:
            rule.check(["0101000070"])

        assert exc_info.value.token == "0101000070"
