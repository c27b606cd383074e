"""Shared fixtures for profilekit tests."""

from pathlib import Path

import pytest

PROFILE_YML = """\
name: ssh-baseline
title: SSH Baseline
version: 1.0.0
summary: Hardening checks for OpenSSH
maintainer: Security Team
copyright: Security Team
license: Apache-2.0
supports:
  - os-family: linux
"""

SSHD_CONTROLS = """\
title: SSH server configuration
controls:
  - id: sshd-01
    title: Disable root login
    desc: Root must not log in over SSH.
    impact: 0.7
    checks:
      - file: /etc/ssh/sshd_config
        contains: PermitRootLogin no
  - id: sshd-02
    title: Use protocol 2
    desc: Only SSH protocol 2 is allowed.
    impact: 1.0
    checks:
      - file: /etc/ssh/sshd_config
        contains: Protocol 2
"""


def write_files(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create files below root; returns root."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_profile(tmp_path):
    """Factory writing a profile directory under tmp_path."""

    def _make(files: dict[str, str | bytes], name: str = "profile") -> Path:
        return write_files(tmp_path / name, files)

    return _make


@pytest.fixture
def profile_dir(make_profile):
    """A well-formed profile with two controls."""
    return make_profile(
        {"profile.yml": PROFILE_YML, "controls/sshd.yml": SSHD_CONTROLS},
        name="ssh-baseline",
    )


@pytest.fixture
def profile_yml() -> str:
    return PROFILE_YML


@pytest.fixture
def sshd_controls() -> str:
    return SSHD_CONTROLS
