"""
request.py

The conversion request every command builds once and hands to the rest of
the pipeline. Values are merged in a fixed order:

    explicit command line flag > prompt answer > default
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from conv3d.errors import UsageError
from conv3d.formats import ALL, parse_model_type
from conv3d.paths import OutputLayout


@dataclass(frozen=True)
class ConversionRequest:
    input_dir: Path
    output_dir: Path
    model_type: str = ALL
    recursive: bool = False
    tsx: bool = False
    optimize: bool = True
    force_overwrite: bool = False
    only_tsx: bool = False
    verbose: bool = False

    def __post_init__(self):
        if not Path(self.output_dir).is_absolute():
            raise ValueError(f"output_dir must be absolute: {self.output_dir}")

    @property
    def layout(self) -> OutputLayout:
        return OutputLayout(Path(self.output_dir))

    @property
    def writes_web_glb(self) -> bool:
        return self.tsx and self.optimize

    def should_convert(self, model_type: str) -> bool:
        return self.model_type in (model_type, ALL)


def _resolve(value, ask: Optional[Callable[[], object]], default):
    if value is not None:
        return value
    if ask is not None:
        return ask()
    return default


@dataclass
class RequestBuilder:
    """Collects flag values, asks for the missing ones, then builds."""

    input_dir: Path
    output_dir: Path
    model_type: Optional[str] = None
    recursive: bool = False
    tsx: Optional[bool] = None
    optimize: Optional[bool] = None
    force_overwrite: bool = False
    only_tsx: bool = False
    verbose: bool = False
    _answers: dict = field(default_factory=dict, repr=False)

    def resolve_model_type(self, ask: Optional[Callable[[], str]] = None) -> str:
        raw = _resolve(self.model_type, ask, ALL)
        try:
            self._answers["model_type"] = parse_model_type(raw)
        except ValueError:
            raise UsageError(f"Invalid model type: {raw}")
        return self._answers["model_type"]

    def resolve_tsx(self, ask: Optional[Callable[[], bool]] = None) -> bool:
        self._answers["tsx"] = bool(_resolve(self.tsx, ask, False))
        return self._answers["tsx"]

    def resolve_optimize(self, ask: Optional[Callable[[], bool]] = None) -> bool:
        self._answers["optimize"] = bool(_resolve(self.optimize, ask, True))
        return self._answers["optimize"]

    def build(self) -> ConversionRequest:
        model_type = self._answers.get("model_type") or self.resolve_model_type()
        tsx = self._answers["tsx"] if "tsx" in self._answers else self.resolve_tsx()
        optimize = (
            self._answers["optimize"] if "optimize" in self._answers
            else self.resolve_optimize()
        )
        return ConversionRequest(
            input_dir=Path(self.input_dir),
            output_dir=Path(self.output_dir),
            model_type=model_type,
            recursive=self.recursive,
            tsx=tsx,
            optimize=optimize,
            force_overwrite=self.force_overwrite,
            only_tsx=self.only_tsx,
            verbose=self.verbose,
        )
