"""Test factories using factory_boy."""

import factory

from repo_sync.config.settings import Settings
from repo_sync.core.models import CommitSummary, HeadState


class SettingsFactory(factory.Factory):
    """Factory for Settings with the shipped defaults."""

    class Meta:
        model = Settings

    git_executable = "git"
    primary_remote = "origin"
    upstream_url = "https://example.com/upstream.git"
    branch_priority = factory.LazyFunction(lambda: ["main", "master", "develop"])
    venv_dir = "venv"
    manifest_file = "requirements.txt"
    required_python = "3.12"
    fast_installer = "uv"


class CommitSummaryFactory(factory.Factory):
    """Factory for CommitSummary instances."""

    class Meta:
        model = CommitSummary

    sha = factory.Sequence(lambda n: f"{n:040x}")
    author = factory.Faker("name")
    date = "Mon Oct 6 12:00:00 2025 +0000"
    subject = factory.Faker("sentence")


class HeadStateFactory(factory.Factory):
    """Factory for HeadState instances."""

    class Meta:
        model = HeadState

    branch = "main"
