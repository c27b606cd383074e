"""Metadata resolver tests."""

import logging

import pytest

from profilekit.errors import MetadataError
from profilekit.metadata import FileMetadataResolver
from profilekit.models import Metadata

LEGACY_INI = """\
[metadata]
name = legacy-profile
title = Legacy Profile
version = 0.9.0
summary = Old style metadata
maintainer = Ops
copyright = Ops
supports = linux, windows
"""


class TestFileMetadataResolver:
    """FileMetadataResolver unit tests."""

    def test_reads_profile_yml(self, profile_dir):
        metadata = FileMetadataResolver().resolve(profile_dir)

        assert metadata.name == "ssh-baseline"
        assert metadata.params["version"] == "1.0.0"
        assert metadata.valid is True
        assert metadata.legacy is False
        assert metadata.source == profile_dir / "profile.yml"

    def test_falls_back_to_legacy_ini(self, make_profile):
        root = make_profile({"metadata.ini": LEGACY_INI})

        metadata = FileMetadataResolver().resolve(root)

        assert metadata.legacy is True
        assert metadata.name == "legacy-profile"
        assert metadata.params["supports"] == ["linux", "windows"]
        assert metadata.valid is True

    def test_prefers_profile_yml_over_legacy(self, make_profile, profile_yml):
        root = make_profile({"profile.yml": profile_yml, "metadata.ini": LEGACY_INI})

        metadata = FileMetadataResolver().resolve(root)

        assert metadata.legacy is False
        assert metadata.name == "ssh-baseline"

    def test_missing_metadata_is_invalid_not_an_error(self, make_profile, caplog):
        root = make_profile({"README.md": "# nothing here"})

        with caplog.at_level(logging.ERROR):
            metadata = FileMetadataResolver().resolve(root)

        assert metadata.params == {}
        assert metadata.valid is False
        assert metadata.source is None
        assert "Missing profile metadata" in caplog.text

    def test_missing_required_field_is_invalid(self, make_profile, caplog):
        root = make_profile({"profile.yml": "name: no-version\ntitle: T\nsummary: S\n"
                                            "maintainer: M\ncopyright: C\n"})

        with caplog.at_level(logging.WARNING):
            metadata = FileMetadataResolver().resolve(root)

        assert metadata.valid is False
        assert "Missing profile version" in caplog.text

    def test_missing_recommended_field_is_invalid(self, make_profile, caplog):
        root = make_profile({"profile.yml": "name: minimal\nversion: 1.0.0\n"})

        with caplog.at_level(logging.WARNING):
            metadata = FileMetadataResolver().resolve(root)

        assert metadata.valid is False
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 4

    def test_empty_profile_yml(self, make_profile):
        root = make_profile({"profile.yml": ""})

        metadata = FileMetadataResolver().resolve(root)

        assert metadata.params == {}
        assert metadata.valid is False

    def test_malformed_yaml_raises(self, make_profile):
        root = make_profile({"profile.yml": "name: [unclosed\n"})

        with pytest.raises(MetadataError):
            FileMetadataResolver().resolve(root)

    def test_non_mapping_yaml_raises(self, make_profile):
        root = make_profile({"profile.yml": "- just\n- a list\n"})

        with pytest.raises(MetadataError, match="must contain a mapping"):
            FileMetadataResolver().resolve(root)

    def test_legacy_without_section_raises(self, make_profile):
        root = make_profile({"metadata.ini": "[profile]\nname = wrong\n"})

        with pytest.raises(MetadataError, match=r"\[metadata\]"):
            FileMetadataResolver().resolve(root)

    def test_custom_file_names(self, make_profile, profile_yml):
        root = make_profile({"meta.yaml": profile_yml})

        metadata = FileMetadataResolver(metadata_file="meta.yaml").resolve(root)

        assert metadata.name == "ssh-baseline"


class TestMetadataSupports:
    """Supported platform handling."""

    def test_supports_normalized_from_strings(self):
        metadata = Metadata(params={"supports": ["linux", {"os-family": "bsd"}]})

        assert metadata.supports == [{"os": "linux"}, {"os-family": "bsd"}]

    def test_no_supports_means_everything(self):
        metadata = Metadata(params={})

        assert metadata.is_supported({"os-family": "windows"})

    def test_matching_entry(self):
        metadata = Metadata(params={"supports": [{"os-family": "linux", "release": "22.04"}]})

        assert metadata.is_supported({"os-family": "linux", "release": "22.04", "arch": "x86_64"})
        assert not metadata.is_supported({"os-family": "linux", "release": "20.04"})
        assert not metadata.is_supported({"os-family": "windows"})
