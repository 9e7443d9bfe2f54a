"""Unity build target identifiers.

Values match UnityEditor.BuildTarget member names exactly (case-sensitive),
since they are passed straight through to the editor.
"""

from __future__ import annotations

from enum import Enum


class BuildTarget(str, Enum):
    """Known Unity build targets"""

    STANDALONE_OSX = "StandaloneOSX"
    STANDALONE_WINDOWS = "StandaloneWindows"
    STANDALONE_WINDOWS64 = "StandaloneWindows64"
    STANDALONE_LINUX64 = "StandaloneLinux64"
    IOS = "iOS"
    ANDROID = "Android"
    WEBGL = "WebGL"
    WSA_PLAYER = "WSAPlayer"
    PS4 = "PS4"
    PS5 = "PS5"
    XBOX_ONE = "XboxOne"
    TVOS = "tvOS"
    SWITCH = "Switch"
    GAME_CORE_XBOX_SERIES = "GameCoreXboxSeries"
    GAME_CORE_XBOX_ONE = "GameCoreXboxOne"
    EMBEDDED_LINUX = "EmbeddedLinux"
    QNX = "QNX"
    VISION_OS = "VisionOS"
    LINUX_HEADLESS_SIMULATION = "LinuxHeadlessSimulation"
    # Obsolete in current editors, still accepted by the enum
    STANDALONE_OSX_INTEL = "StandaloneOSXIntel"
    STANDALONE_OSX_INTEL64 = "StandaloneOSXIntel64"
    STANDALONE_LINUX = "StandaloneLinux"
    STANDALONE_LINUX_UNIVERSAL = "StandaloneLinuxUniversal"
    LUMIN = "Lumin"
    STADIA = "Stadia"
    CLOUD_RENDERING = "CloudRendering"

    @property
    def is_legacy(self) -> bool:
        return self in _LEGACY_TARGETS

    @property
    def is_standalone(self) -> bool:
        return self.value.startswith("Standalone")


_LEGACY_TARGETS = frozenset(
    {
        BuildTarget.STANDALONE_OSX_INTEL,
        BuildTarget.STANDALONE_OSX_INTEL64,
        BuildTarget.STANDALONE_LINUX,
        BuildTarget.STANDALONE_LINUX_UNIVERSAL,
        BuildTarget.LUMIN,
        BuildTarget.STADIA,
        BuildTarget.CLOUD_RENDERING,
    }
)

_TARGETS_BY_NAME = {target.value: target for target in BuildTarget}


def is_known_target(name: str | None) -> bool:
    """Check if name is a known build target (exact, case-sensitive match)."""
    return name is not None and name in _TARGETS_BY_NAME


def parse_target(name: str) -> BuildTarget:
    """Look up a build target by its Unity name.

    Raises:
        ValueError: If name is not a known build target.
    """
    try:
        return _TARGETS_BY_NAME[name]
    except KeyError:
        raise ValueError(f"Unknown build target: {name!r}") from None
