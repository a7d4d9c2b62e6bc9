"""
config.py

Runtime settings for the external converters, read from the environment.
A `.env` file in the working directory is loaded first, so tool locations
can be pinned per project:

    FBX2GLTF_PATH=/opt/fbx2gltf/FBX2glTF
    GLTFJSX_COMMAND=npx --yes gltfjsx
    CONV3D_TOOL_TIMEOUT=300
    CONV3D_OUTPUT_DIR=_convert-3d-for-web
    CONV3D_OPTIMIZE=true
"""

import os
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_OUTPUT_DIR = "_convert-3d-for-web"

_TRUTHY = {"1", "true", "yes", "y", "on"}
_FALSY = {"0", "false", "no", "n", "off"}


@dataclass(frozen=True)
class Settings:
    fbx2gltf: str = "FBX2glTF"
    gltfjsx: tuple = ("npx", "--yes", "gltfjsx")
    tool_timeout: Optional[float] = None
    output_dir_name: str = DEFAULT_OUTPUT_DIR
    optimize: Optional[bool] = None

    def gltfjsx_command(self) -> List[str]:
        return list(self.gltfjsx)


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None or not value.strip():
        return None
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Expected a boolean, got {value!r}")


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    timeout = float(value)
    return timeout if timeout > 0 else None


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Load settings from `.env` (if present) and the process environment."""
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    gltfjsx = os.getenv("GLTFJSX_COMMAND")
    return Settings(
        fbx2gltf=os.getenv("FBX2GLTF_PATH") or Settings.fbx2gltf,
        gltfjsx=tuple(shlex.split(gltfjsx)) if gltfjsx else Settings.gltfjsx,
        tool_timeout=_parse_timeout(os.getenv("CONV3D_TOOL_TIMEOUT")),
        output_dir_name=os.getenv("CONV3D_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR,
        optimize=_parse_bool(os.getenv("CONV3D_OPTIMIZE")),
    )
