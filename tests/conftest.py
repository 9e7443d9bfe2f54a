"""Shared fixtures"""

from __future__ import annotations

from pathlib import Path

import pytest

PROJECT_VERSION_TXT = """\
m_EditorVersion: 2022.3.10f1
m_EditorVersionWithRevision: 2022.3.10f1 (ff3792e53c62)
"""

PROJECT_SETTINGS_ASSET = """\
%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!129 &1
PlayerSettings:
  m_ObjectHideFlags: 0
  serializedVersion: 26
  companyName: Acme
  productName: Messenger
  bundleVersion: 1.4.2
  AndroidBundleVersionCode: 17
"""


@pytest.fixture
def unity_project(tmp_path: Path) -> Path:
    """Minimal Unity project layout on disk."""
    project = tmp_path / "Game"
    (project / "Assets").mkdir(parents=True)
    settings = project / "ProjectSettings"
    settings.mkdir()
    (settings / "ProjectVersion.txt").write_text(PROJECT_VERSION_TXT, encoding="utf-8")
    (settings / "ProjectSettings.asset").write_text(PROJECT_SETTINGS_ASSET, encoding="utf-8")
    return project
