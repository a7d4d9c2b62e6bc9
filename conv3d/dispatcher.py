"""
dispatcher.py

Runs one converter over a batch of files, strictly one file at a time.

Each file ends up in exactly one of three buckets:

    converted  the output was written
    errors     the converter raised; the batch carries on
    skipped    the output already existed and the operator kept it

Ctrl-C stops the spinner and ends the process with exit code 0.
"""

import sys
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from conv3d import console, prompts
from conv3d.converters import Converter
from conv3d.formats import Format, target_of
from conv3d.paths import output_path_for
from conv3d.request import ConversionRequest


@dataclass
class FileError:
    path: Path
    error: BaseException

    def __str__(self):
        return f"{self.path}: {self.error}"


@dataclass
class ConversionOutcome:
    converted: List[Path] = field(default_factory=list)
    errors: List[FileError] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.errors) + len(self.skipped)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def convert_models(
    fmt: Format,
    files: List,
    input_dir,
    output_dir,
    request: ConversionRequest,
    converters: Mapping[Format, Converter],
    status=None,
) -> ConversionOutcome:
    """Convert `files` (relative to `input_dir`, or absolute) from `fmt`.

    Outputs go to <output_dir>/<target folder>/<stem><target extension>.
    """
    fmt = Format(fmt)
    outcome = ConversionOutcome()

    if not files:
        console.warn(f"No {fmt.value} models found in the input directory, skipping...")
        return outcome

    console.info(
        f"Found {_plural(len(files), fmt.value + ' model')} to convert "
        f"from input dir: {input_dir}"
    )

    target = target_of(fmt)
    converter = converters[fmt]
    total = len(files)
    message = f"Converting {fmt.value} files to {target.value}..."

    spinner = status or console.console.status(message)
    spinner.start()
    try:
        for file in files:
            input_path = Path(input_dir, file).resolve()
            output_path = output_path_for(file, output_dir, target).resolve()

            if output_path.is_file() and not request.force_overwrite:
                spinner.stop()
                console.warn(f"{output_path.name} already exists in the output directory")
                if not prompts.ask_for_file_overwrite(output_path):
                    console.warn(f"Skipping {output_path.name}")
                    outcome.skipped.append(output_path)
                    spinner.start()
                    continue
                spinner.start()

            try:
                converter(input_path, output_path)
            except Exception as e:
                outcome.errors.append(FileError(input_path, e))
                spinner.stop()
                console.error(f"Error converting {file}")
                console.error(str(e))
                if request.verbose:
                    traceback.print_exc()
                console.info("Continuing with the rest of the models...")
                spinner.start()
                continue

            outcome.converted.append(output_path)
            spinner.update(f"{message} ({len(outcome.converted)}/{total}) {Path(file).name}")
    except KeyboardInterrupt:
        spinner.stop()
        console.error("Conversion cancelled")
        sys.exit(0)

    spinner.stop()
    console.done(
        f"{fmt.value} conversion completed: {len(outcome.converted)}/{total} converted"
        + (f", {len(outcome.errors)} failed" if outcome.errors else "")
        + (f", {len(outcome.skipped)} skipped" if outcome.skipped else "")
    )
    return outcome


def run_component_pass(
    files: List,
    input_dir,
    output_dir,
    request: ConversionRequest,
    converters: Mapping[Format, Converter],
) -> Optional[ConversionOutcome]:
    """Second pass over produced .glb files, only when .tsx output was asked for."""
    if not request.tsx:
        console.info("Skipped adding .tsx files, like instructed 🫡")
        return None
    console.info("Generating .tsx files...")
    return convert_models(Format.GLB, files, input_dir, output_dir, request, converters)
