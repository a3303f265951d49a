"""Tests for the version resolver decision table."""

from unittest.mock import MagicMock

import pytest

from bucketwatch.config import CheckRequest
from bucketwatch.constants import VersionTypes
from bucketwatch.errors import BackendError, ConfigurationError, VersionParseError
from bucketwatch.store import SnapshotObjectStore
from bucketwatch.versioning.models import NativeVersioning, Reference, RegexPath
from bucketwatch.versioning.resolver import VersionResolver

BUCKET = "bucket-name"

KEYS = [
    "files/abc-0.0.1.tgz",
    "files/abc-2.33.333.tgz",
    "files/abc-2.4.3.tgz",
    "files/abc-3.53.tgz",
]

HISTORY = ["file-version-3", "file-version-2", "file-version-1"]


@pytest.fixture
def store():
    """Store with a key listing and one versioned file."""
    return SnapshotObjectStore({
        BUCKET: {
            "keys": KEYS,
            "versions": {"files/versioned-file": HISTORY, "files/empty": []},
        }
    })


@pytest.fixture
def resolver(store):
    return VersionResolver(store)


def paths(result):
    return [v.path for v in result]


def version_ids(result):
    return [v.version_id for v in result]


def regex(pattern="files/abc-(.*).tgz", **kwargs):
    return RegexPath(bucket=BUCKET, pattern=pattern, **kwargs)


class TestRegexWithoutReference:
    """No previous version: report the latest only."""

    def test_reports_latest(self, resolver):
        assert paths(resolver.resolve(regex())) == ["files/abc-3.53.tgz"]

    def test_is_idempotent(self, resolver):
        first = resolver.resolve(regex())
        second = resolver.resolve(regex())
        assert first == second

    def test_seed_does_not_hide_latest(self, resolver):
        result = resolver.resolve(regex(initial_path="files/abc-0.0.tgz"))
        assert paths(result) == ["files/abc-3.53.tgz"]

    def test_no_matches_is_empty(self, resolver):
        assert resolver.resolve(regex("no-files/missing-(.*).tgz")) == []

    def test_seed_reported_when_nothing_matches(self, resolver):
        mode = regex("no-files/missing-(.*).tgz", initial_path="no-files/missing-0.0.tgz")
        assert paths(resolver.resolve(mode)) == ["no-files/missing-0.0.tgz"]

    def test_empty_reference_counts_as_absent(self, resolver):
        assert paths(resolver.resolve(regex(), Reference())) == ["files/abc-3.53.tgz"]


class TestRegexWithReference:
    """Previous version known: report it and everything newer."""

    def test_reports_reference_and_newer(self, resolver):
        result = resolver.resolve(regex(), Reference(path="files/abc-2.4.3.tgz"))
        assert paths(result) == [
            "files/abc-2.4.3.tgz",
            "files/abc-2.33.333.tgz",
            "files/abc-3.53.tgz",
        ]

    def test_reference_matching_latest_reports_it_again(self, resolver):
        result = resolver.resolve(regex(), Reference(path="files/abc-3.53.tgz"))
        assert paths(result) == ["files/abc-3.53.tgz"]

    def test_monotonic_since(self):
        store = SnapshotObjectStore({BUCKET: {"keys": ["rel/app-3.0.tgz", "rel/app-1.0.tgz", "rel/app-2.0.tgz"]}})
        result = VersionResolver(store).resolve(
            regex(r"rel/app-(.*)\.tgz"), Reference(path="rel/app-2.0.tgz")
        )
        assert paths(result) == ["rel/app-2.0.tgz", "rel/app-3.0.tgz"]

    def test_reference_outside_pattern_falls_back_to_latest(self, resolver):
        result = resolver.resolve(regex(r"files/abc-(2\.33.*).tgz"), Reference(path="files/abc-0.0.1.tgz"))
        assert paths(result) == ["files/abc-2.33.333.tgz"]

    def test_narrowed_pattern_fallback(self):
        store = SnapshotObjectStore({BUCKET: {"keys": ["app-1.1", "app-1.2"]}})
        result = VersionResolver(store).resolve(regex(r"app-(1\.[2].*)"), Reference(path="app-0.9"))
        assert paths(result) == ["app-1.2"]

    def test_deleted_reference_still_bounds_results(self, resolver):
        result = resolver.resolve(regex(), Reference(path="files/abc-2.5.0.tgz"))
        assert paths(result) == ["files/abc-2.33.333.tgz", "files/abc-3.53.tgz"]

    def test_seed_as_reference(self, resolver):
        mode = regex(initial_path="files/abc-0.0.tgz")
        result = resolver.resolve(mode, Reference(path="files/abc-0.0.tgz"))
        assert paths(result) == ["files/abc-0.0.tgz"] + [
            "files/abc-0.0.1.tgz",
            "files/abc-2.4.3.tgz",
            "files/abc-2.33.333.tgz",
            "files/abc-3.53.tgz",
        ]

    def test_seed_already_in_catalog_is_not_repeated(self, resolver):
        mode = regex(initial_path="files/abc-2.4.3.tgz")
        result = resolver.resolve(mode, Reference(path="files/abc-0.0.1.tgz"))
        assert paths(result) == [
            "files/abc-0.0.1.tgz",
            "files/abc-2.4.3.tgz",
            "files/abc-2.33.333.tgz",
            "files/abc-3.53.tgz",
        ]

    def test_commits_only_order_equal_versions(self):
        store = SnapshotObjectStore({BUCKET: {"keys": [
            "app-1.3.0-0-gaaaaaaa.tgz",
            "app-1.2.0-10-gbbbbbbb.tgz",
            "app-1.2.0-3-gccccccc.tgz",
        ]}})
        mode = regex(r"app-(?P<version>[\d.]+)-(?P<commits_since_version>\d+)-g[0-9a-f]+\.tgz")
        result = VersionResolver(store).resolve(mode, Reference(path="app-1.2.0-10-gbbbbbbb.tgz"))
        assert paths(result) == [
            "app-1.2.0-3-gccccccc.tgz",
            "app-1.2.0-10-gbbbbbbb.tgz",
            "app-1.3.0-0-gaaaaaaa.tgz",
        ]

    def test_reference_against_empty_catalog(self, resolver):
        mode = regex("no-files/missing-(.*).tgz")
        assert resolver.resolve(mode, Reference(path="no-files/missing-1.0.tgz")) == []

    def test_string_versions(self):
        store = SnapshotObjectStore({BUCKET: {"keys": [
            "abc-2022-01-21.tgz", "abc-2022-12-01.tgz", "abc-2021-12-31.tgz",
        ]}})
        mode = regex("abc-(.*).tgz", version_type=VersionTypes.STRING)
        resolver = VersionResolver(store)
        assert paths(resolver.resolve(mode)) == ["abc-2022-12-01.tgz"]
        assert paths(resolver.resolve(mode, Reference(path="abc-2022-01-21.tgz"))) == [
            "abc-2022-01-21.tgz", "abc-2022-12-01.tgz",
        ]


class TestRegexErrors:
    """Failures surfaced from regex resolution."""

    def test_malformed_pattern_makes_no_backend_call(self):
        store = MagicMock()
        with pytest.raises(ConfigurationError):
            VersionResolver(store).resolve(regex("files/abc-(.*.tgz"))
        store.list_keys.assert_not_called()
        store.list_object_versions.assert_not_called()

    def test_unparsable_version_is_fatal(self):
        store = SnapshotObjectStore({BUCKET: {"keys": ["files/abc-1.0.tgz", "files/abc-latest.tgz"]}})
        with pytest.raises(VersionParseError):
            VersionResolver(store).resolve(regex())

    def test_backend_error_propagates(self):
        store = MagicMock()
        store.list_keys.side_effect = BackendError("S3 failure")
        with pytest.raises(BackendError):
            VersionResolver(store).resolve(regex())

    def test_lists_with_prefix_hint(self):
        store = MagicMock()
        store.list_keys.return_value = KEYS
        VersionResolver(store).resolve(regex())
        store.list_keys.assert_called_once_with(BUCKET, "files/")


class TestVersionedFile:
    """Store-native version history."""

    def mode(self, key="files/versioned-file", initial_version=None):
        return NativeVersioning(bucket=BUCKET, key=key, initial_version=initial_version)

    def test_no_reference_reports_newest(self, resolver):
        assert version_ids(resolver.resolve(self.mode())) == ["file-version-3"]

    def test_reference_and_newer_oldest_first(self, resolver):
        result = resolver.resolve(self.mode(), Reference(version_id="file-version-2"))
        assert version_ids(result) == ["file-version-2", "file-version-3"]

    def test_oldest_reference(self, resolver):
        result = resolver.resolve(self.mode(), Reference(version_id="file-version-1"))
        assert version_ids(result) == ["file-version-1", "file-version-2", "file-version-3"]

    def test_newest_reference(self, resolver):
        result = resolver.resolve(self.mode(), Reference(version_id="file-version-3"))
        assert version_ids(result) == ["file-version-3"]

    def test_deleted_reference_reports_newest(self, resolver):
        result = resolver.resolve(self.mode(), Reference(version_id="file-version-0"))
        assert version_ids(result) == ["file-version-3"]

    def test_empty_history(self, resolver):
        assert resolver.resolve(self.mode("files/empty")) == []
        assert resolver.resolve(self.mode("files/missing"), Reference(version_id="x")) == []

    def test_initial_version_when_history_empty(self, resolver):
        result = resolver.resolve(self.mode("files/empty", initial_version="file-version-0"))
        assert version_ids(result) == ["file-version-0"]

    def test_initial_version_is_oldest(self, resolver):
        mode = self.mode(initial_version="file-version-0")
        assert version_ids(resolver.resolve(mode)) == ["file-version-3"]
        assert version_ids(resolver.resolve(mode, Reference(version_id="file-version-0"))) == [
            "file-version-0", "file-version-1", "file-version-2", "file-version-3",
        ]

    def test_unknown_bucket(self):
        with pytest.raises(BackendError):
            VersionResolver(SnapshotObjectStore()).resolve(self.mode())


class TestCheck:
    """Full requests, validated before the store is touched."""

    def test_both_modes_rejected_before_backend(self):
        store = MagicMock()
        request = CheckRequest.from_dict({
            "source": {"bucket": BUCKET, "regexp": "a-(.*)", "versioned_file": "f"},
        })
        with pytest.raises(ConfigurationError):
            VersionResolver(store).check(request)
        assert store.method_calls == []

    def test_regexp_request(self, resolver):
        request = CheckRequest.from_dict({
            "source": {"bucket": BUCKET, "regexp": "files/abc-(.*).tgz"},
            "version": {"path": "files/abc-2.33.333.tgz"},
        })
        result = resolver.check(request)
        assert [v.to_dict() for v in result] == [
            {"path": "files/abc-2.33.333.tgz"},
            {"path": "files/abc-3.53.tgz"},
        ]

    def test_versioned_file_request(self, resolver):
        request = CheckRequest.from_dict({
            "source": {"bucket": BUCKET, "versioned_file": "files/versioned-file"},
            "version": None,
        })
        assert [v.to_dict() for v in resolver.check(request)] == [{"version_id": "file-version-3"}]
