"""Interactive questions asked when a value was not given on the command line."""

from typing import Dict, List, Tuple

from rich.markup import escape
from rich.prompt import Confirm, Prompt

from conv3d.console import console
from conv3d.errors import UsageError
from conv3d.formats import ALL


def model_type_choices(counts: Dict[str, int]) -> List[Tuple[str, int]]:
    """(model type, available files) pairs worth offering; empty types are hidden."""
    total = sum(counts.values())
    choices = [(key, count) for key, count in counts.items() if count > 0]
    if total > 0:
        choices.append((ALL, total))
    return choices


def prompt_for_model_type(counts: Dict[str, int]) -> str:
    choices = model_type_choices(counts)
    if not choices:
        raise UsageError("No suitable models found in the input directory")

    console.print("Select the type of 3D models to convert:")
    for key, count in choices:
        console.print(f"  [cyan]{key}[/cyan] ({count} available)")
    return Prompt.ask(
        "Model type",
        choices=[key for key, _ in choices],
        default=choices[0][0],
        console=console,
    )


def prompt_for_tsx_output() -> bool:
    return Confirm.ask("Generate .tsx files?", default=True, console=console)


def prompt_for_optimized_glb_output() -> bool:
    return Confirm.ask(
        "Optimize output GLB files for web? (recommended)", default=True, console=console
    )


def confirm_plan() -> bool:
    return Confirm.ask("Looking good?", default=True, console=console)


def ask_for_file_overwrite(file_path) -> bool:
    return Confirm.ask(f"Overwrite the file? {escape(str(file_path))}", default=False, console=console)


def confirm_removal(path) -> bool:
    return Confirm.ask(f"Remove {escape(str(path))} and everything in it?", default=False, console=console)
