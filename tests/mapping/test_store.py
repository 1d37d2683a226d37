"""Tests for ConfigurationStore — rename and ignore rules."""

from dataclasses import dataclass

from pymapper.mapping.store import ConfigurationStore


@dataclass
class Source:
    name: str = ""
    nickname: str = ""


@dataclass
class Target:
    full_name: str = ""


@dataclass
class OtherSource:
    name: str = ""


class TestRenames:
    def test_unconfigured_pair_has_no_rename(self):
        store = ConfigurationStore()
        assert store.get_rename_for(Source, Target, "full_name") is None

    def test_rename_is_recorded_per_pair(self):
        store = ConfigurationStore()
        store.set_rename(Source, Target, "name", "full_name")

        assert store.get_rename_for(Source, Target, "full_name") == "name"
        assert store.get_rename_for(OtherSource, Target, "full_name") is None

    def test_last_write_wins(self):
        store = ConfigurationStore()
        store.set_rename(Source, Target, "name", "full_name")
        store.set_rename(Source, Target, "nickname", "full_name")

        assert store.get_rename_for(Source, Target, "full_name") == "nickname"

    def test_renames_for_returns_read_only_snapshot(self):
        store = ConfigurationStore()
        store.set_rename(Source, Target, "name", "full_name")

        snapshot = store.renames_for(Source, Target)

        assert dict(snapshot) == {"full_name": "name"}
        store.set_rename(Source, Target, "nickname", "full_name")
        assert snapshot["full_name"] == "name"


class TestIgnores:
    def test_ignore_applies_to_target_type(self):
        store = ConfigurationStore()
        store.set_ignored(Target, "full_name")

        assert store.is_ignored(Target, "full_name")
        assert not store.is_ignored(Source, "full_name")
        assert store.ignored_for(Target) == frozenset({"full_name"})

    def test_unknown_target_has_no_ignores(self):
        assert ConfigurationStore().ignored_for(Target) == frozenset()


class TestListeners:
    def test_rename_notifies_with_pair(self):
        store = ConfigurationStore()
        events = []
        store.add_listener(lambda source, target: events.append((source, target)))

        store.set_rename(Source, Target, "name", "full_name")

        assert events == [(Source, Target)]

    def test_ignore_notifies_every_source(self):
        store = ConfigurationStore()
        events = []
        store.add_listener(lambda source, target: events.append((source, target)))

        store.set_ignored(Target, "full_name")

        assert events == [(None, Target)]
