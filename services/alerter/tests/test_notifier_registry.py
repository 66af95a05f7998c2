"""Tests for notifier registry construction."""

from __future__ import annotations

import pytest

from volt_common.config import Settings

from alerter.notifiers import (
    EmailNotifier,
    PagerdutyNotifier,
    SlackNotifier,
    build_registry,
    default_notifiers,
)


class TestBuildRegistry:

    def test_indexes_by_identify(self, fake_notifier) -> None:
        a, b = fake_notifier("a"), fake_notifier("b")
        registry = build_registry([a, b])
        assert registry == {"a": a, "b": b}

    def test_duplicate_names_rejected(self, fake_notifier) -> None:
        with pytest.raises(ValueError, match="Duplicate notifier type 'a'"):
            build_registry([fake_notifier("a"), fake_notifier("a")])

    def test_registry_is_immutable(self, fake_notifier) -> None:
        registry = build_registry([fake_notifier("a")])
        with pytest.raises(TypeError):
            registry["b"] = fake_notifier("b")  # type: ignore[index]


class TestDefaultNotifiers:

    def test_builtin_notifiers_use_settings(self) -> None:
        settings = Settings(
            slack_bot_token="xoxb-1",
            smtp_host="mail.example.com",
            smtp_port=2525,
            email_from="volt@example.com",
            notifier_timeout_s=3.0,
            pagerduty_events_url="https://pd.example.com/enqueue",
        )
        notifiers = default_notifiers(settings)
        registry = build_registry(notifiers)

        assert set(registry) == {"pagerduty", "slack", "email"}
        pd = registry["pagerduty"]
        slack = registry["slack"]
        email = registry["email"]
        assert isinstance(pd, PagerdutyNotifier)
        assert isinstance(slack, SlackNotifier)
        assert isinstance(email, EmailNotifier)
        assert pd.events_url == "https://pd.example.com/enqueue"
        assert pd.timeout == 3.0
        assert slack.default_token == "xoxb-1"
        assert email.smtp_host == "mail.example.com"
        assert email.smtp_port == 2525
        assert email.sender == "volt@example.com"
