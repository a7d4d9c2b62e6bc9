"""Announce what will be written where, confirm, then create the output tree."""

from conv3d import console, prompts
from conv3d.errors import UserAbort
from conv3d.paths import tildify
from conv3d.request import ConversionRequest


def _files(count: int, extension: str) -> str:
    return f"{count} {extension} file{'s' if count != 1 else ''}"


def describe_plan(request: ConversionRequest, num_files: int):
    layout = request.layout
    if not request.only_tsx:
        console.info(f"Will write {_files(num_files, '.glb')} to {tildify(layout.glb)}")
    if request.tsx:
        console.info(f"Will write {_files(num_files, '.tsx')} to {tildify(layout.tsx)}")
    if request.writes_web_glb:
        console.info(f"Will write {_files(num_files, '.glb')} to {tildify(layout.web_glb)}")
        console.info("These will be optimized and much smaller!")


def setup_output_dirs(request: ConversionRequest, num_files: int):
    """Print the plan and create the directories once the operator agrees.

    Raises UserAbort when the plan is declined; nothing is created then.
    """
    describe_plan(request, num_files)

    if not prompts.confirm_plan():
        raise UserAbort("Aborted, nothing was written")

    layout = request.layout
    layout.root.mkdir(parents=True, exist_ok=True)
    layout.glb.mkdir(parents=True, exist_ok=True)
    if request.tsx:
        layout.tsx.mkdir(parents=True, exist_ok=True)
    if request.writes_web_glb:
        layout.web_glb.mkdir(parents=True, exist_ok=True)

    console.success("Output directories created")
