"""Directory layout of an engine project."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_FONT_NAME = "Consolas"
DEFAULT_FONT_SIZE = 8
MAKE_FONT_BMP = True


@dataclass(frozen=True)
class ProjectPaths:
    """Locations of data, code and build artefacts under a project root."""

    root: Path
    data: Path
    code: Path
    build: Path
    assets: Path
    logs: Path
    meshes: Path
    fonts: Path
    actual_dll: Path
    copied_dll: Path
    core: Path
    graphics: Path
    math: Path
    platform: Path

    @classmethod
    def from_root(cls, root: str | os.PathLike[str]) -> ProjectPaths:
        """Build the standard layout below ``root``."""
        root = Path(root)
        data = root / "data"
        code = root / "code"
        build = root / "exe"
        assets = data / "assets"
        return cls(
            root=root,
            data=data,
            code=code,
            build=build,
            assets=assets,
            logs=data / "logs",
            meshes=assets / "meshes",
            fonts=assets / "fonts",
            actual_dll=build / "main.dll",
            copied_dll=build / "main_copy.dll",
            core=code / "core",
            graphics=code / "graphics",
            math=code / "math",
            platform=code / "platform",
        )

    def font_atlas_path(
        self, font_name: str = DEFAULT_FONT_NAME, size: int = DEFAULT_FONT_SIZE
    ) -> Path:
        """Path of the glyph atlas bitmap for a font at a given size."""
        return self.fonts / f"{font_name}{size}.bmp"

    def font_data_path(
        self, font_name: str = DEFAULT_FONT_NAME, size: int = DEFAULT_FONT_SIZE
    ) -> Path:
        """Path of the glyph metrics file for a font at a given size."""
        return self.fonts / f"{font_name}{size}.font"