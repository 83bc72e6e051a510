"""Tests for attempt-order resolution in the remotes module."""

from __future__ import annotations

import logging

import pytest

from git_upstream.data_types import RunPolicy
from git_upstream.remotes import (
    MissingPreferredRemote,
    NoRemotesConfigured,
    build_preference_list,
    order_remotes,
    resolve_attempt_order,
)


def _warnings(caplog: pytest.LogCaptureFixture) -> list[str]:
    return [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]


class TestBuildPreferenceList:
    def test_defaults_to_origin(self) -> None:
        assert build_preference_list(None, []) == ["origin"]

    def test_cli_remote_comes_before_config(self) -> None:
        assert build_preference_list("fork", ["upstream", "mirror"]) == ["fork", "upstream", "mirror"]

    def test_config_only(self) -> None:
        assert build_preference_list(None, ["upstream"]) == ["upstream"]

    def test_duplicates_collapse_to_first_occurrence(self) -> None:
        assert build_preference_list("origin", ["fork", "origin", "fork"]) == ["origin", "fork"]

    def test_explicit_preferences_do_not_add_origin(self) -> None:
        assert "origin" not in build_preference_list("fork", [])


class TestOrderRemotes:
    def test_origin_first_then_lexicographic(self, logger: logging.Logger) -> None:
        order = order_remotes({"zeta", "origin", "alpha"}, ["origin"], logger)
        assert order.remotes == ("origin", "alpha", "zeta")

    def test_preferred_remote_then_sorted_remainder(self, logger: logging.Logger) -> None:
        order = order_remotes({"origin", "upstream", "fork"}, ["upstream"], logger)
        assert order.remotes == ("upstream", "fork", "origin")

    def test_preferred_remotes_keep_given_order(self, logger: logging.Logger) -> None:
        order = order_remotes({"origin", "upstream", "fork", "mirror"}, ["upstream", "fork"], logger)
        assert order.remotes == ("upstream", "fork", "mirror", "origin")

    def test_every_known_remote_is_attempted(self, logger: logging.Logger) -> None:
        known = {"a", "b", "c", "origin"}
        order = order_remotes(known, ["c"], logger)
        assert set(order.remotes) == known
        assert len(order) == len(known)

    def test_missing_preferred_remote_is_skipped_with_warning(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        order = order_remotes({"origin", "fork"}, ["ghost", "fork"], logger)

        assert order.remotes == ("fork", "origin")
        assert order.skipped == ("ghost",)
        [warning] = _warnings(caplog)
        assert "'ghost' not found" in warning
        assert "• fork" in warning
        assert "• origin" in warning

    def test_no_duplicates_when_preferences_overlap(self, logger: logging.Logger) -> None:
        preferences = build_preference_list("origin", ["origin", "fork", "origin"])
        order = order_remotes({"origin", "fork", "upstream"}, preferences, logger)

        assert order.remotes == ("origin", "fork", "upstream")
        assert len(set(order.remotes)) == len(order.remotes)

    def test_no_surviving_preferences_uses_sorted_remotes(
        self, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        order = order_remotes({"b", "a"}, ["origin"], logger, warn_missing=False)

        assert order.remotes == ("a", "b")
        assert _warnings(caplog) == []

    def test_resolution_is_idempotent(self, logger: logging.Logger) -> None:
        known = {"origin", "upstream", "fork", "mirror"}
        preferences = ["mirror", "ghost", "origin"]

        first = order_remotes(known, preferences, logger)
        second = order_remotes(known, preferences, logger)

        assert first == second

    def test_empty_known_remotes(self, logger: logging.Logger) -> None:
        with pytest.raises(NoRemotesConfigured):
            order_remotes(set(), ["origin"], logger)

    def test_strict_remote_missing_is_fatal(self, logger: logging.Logger) -> None:
        with pytest.raises(MissingPreferredRemote) as exc_info:
            order_remotes({"origin"}, ["ghost"], logger, strict="ghost")

        assert exc_info.value.remote == "ghost"
        assert exc_info.value.available == ("origin",)
        assert "Available Git remotes:\n• origin" in str(exc_info.value)


class TestResolveAttemptOrder:
    def test_default_policy_prefers_origin(self, fake_git, logger: logging.Logger) -> None:
        git = fake_git("upstream", "origin", "fork")
        order = resolve_attempt_order(git, RunPolicy(), logger)
        assert order.remotes == ("origin", "fork", "upstream")

    def test_missing_default_origin_is_not_a_warning(
        self, fake_git, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        git = fake_git("upstream", "fork")
        order = resolve_attempt_order(git, RunPolicy(), logger)

        assert order.remotes == ("fork", "upstream")
        assert _warnings(caplog) == []

    def test_cli_remote_before_config_remotes(self, fake_git, logger: logging.Logger) -> None:
        git = fake_git("origin", "upstream", "fork", "mirror")
        policy = RunPolicy(remote="fork", config_remotes=("mirror", "fork"))

        order = resolve_attempt_order(git, policy, logger)

        assert order.remotes == ("fork", "mirror", "origin", "upstream")

    def test_missing_cli_remote_under_fail_fast(self, fake_git, logger: logging.Logger) -> None:
        git = fake_git("origin")
        policy = RunPolicy(remote="ghost", fail_fast=True)

        with pytest.raises(MissingPreferredRemote):
            resolve_attempt_order(git, policy, logger)
        assert git.pushes == []

    def test_missing_cli_remote_without_fail_fast_warns(
        self, fake_git, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        git = fake_git("origin")
        order = resolve_attempt_order(git, RunPolicy(remote="ghost"), logger)

        assert order.remotes == ("origin",)
        assert any("'ghost' not found" in warning for warning in _warnings(caplog))

    def test_missing_config_remote_under_fail_fast_only_warns(
        self, fake_git, logger: logging.Logger, caplog: pytest.LogCaptureFixture
    ) -> None:
        git = fake_git("origin", "fork")
        policy = RunPolicy(fail_fast=True, config_remotes=("ghost", "fork"))

        order = resolve_attempt_order(git, policy, logger)

        assert order.remotes == ("fork", "origin")
        assert order.skipped == ("ghost",)
        assert len(_warnings(caplog)) == 1

    def test_no_remotes(self, fake_git, logger: logging.Logger) -> None:
        with pytest.raises(NoRemotesConfigured):
            resolve_attempt_order(fake_git(), RunPolicy(remote="origin"), logger)
