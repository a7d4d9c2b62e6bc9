"""Path helpers and the conventional layout of the output directory."""

from dataclasses import dataclass
from pathlib import Path

GLB_DIR = "glb"
TSX_DIR = "tsx"
WEB_GLB_DIR = "glb-for-web"


def resolve(path) -> Path:
    """Absolute path, relative paths taken against the working directory."""
    return Path(path).expanduser().resolve()


def is_directory(path) -> bool:
    return Path(path).is_dir()


def tildify(path) -> str:
    """Show paths under the home directory as ~/..."""
    home = Path.home()
    if home == Path(home.anchor):
        return str(path)
    try:
        relative = Path(path).relative_to(home)
    except ValueError:
        return str(path)
    return "~" if relative == Path(".") else "~/" + relative.as_posix()


@dataclass(frozen=True)
class OutputLayout:
    root: Path

    @property
    def glb(self) -> Path:
        return self.root / GLB_DIR

    @property
    def tsx(self) -> Path:
        return self.root / TSX_DIR

    @property
    def web_glb(self) -> Path:
        return self.root / WEB_GLB_DIR


def output_path_for(input_path, output_dir, target) -> Path:
    """<output_dir>/<target folder>/<input stem><target extension>"""
    return Path(output_dir) / target.folder / (Path(input_path).stem + target.extension)
