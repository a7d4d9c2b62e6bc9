"""
commands.py

The subcommands behind the CLI:

    single   convert one model file
    bulk     convert every model in a directory
    tsx-gen  generate .tsx components for existing .glb files
    clean    remove the output folder of a previous run

Each command validates its arguments, builds a ConversionRequest, confirms
the plan and runs the dispatcher. Problems with the arguments raise
UsageError; the CLI turns that into exit code 1.
"""

import argparse
import shutil
from pathlib import Path

from conv3d import console, prompts
from conv3d.collector import collect_by_format, collect_glb_files, list_files
from conv3d.config import Settings
from conv3d.converters import converters_for
from conv3d.dispatcher import convert_models, run_component_pass
from conv3d.errors import UsageError, UserAbort
from conv3d.formats import ALL, MODEL_FORMATS, Format, format_from_path
from conv3d.output import setup_output_dirs
from conv3d.paths import is_directory, resolve, tildify
from conv3d.request import RequestBuilder


def _input_directory(value) -> Path:
    if not value:
        raise UsageError('Please specify an input directory with -i "yourInputDirectory"')
    input_dir = resolve(value)
    if not is_directory(input_dir):
        raise UsageError(f"Invalid input directory: {input_dir}")
    return input_dir


def _resolve_tsx_and_optimize(builder: RequestBuilder, settings: Settings):
    tsx = builder.resolve_tsx(prompts.prompt_for_tsx_output)
    if builder.optimize is None:
        builder.optimize = settings.optimize
    builder.resolve_optimize(prompts.prompt_for_optimized_glb_output if tsx else None)


def _report(converted: int, expected: int, input_dir: Path, output_dir: Path):
    console.success(
        f'Successfully converted {converted}/{expected} models from "{tildify(input_dir)}"'
    )
    console.info(f'Output saved to "{tildify(output_dir)}"')


def cmd_bulk(args: argparse.Namespace, settings: Settings) -> int:
    input_dir = _input_directory(args.input_dir)
    output_dir = (
        resolve(args.output_dir) if args.output_dir
        else input_dir / settings.output_dir_name
    )

    files = list_files(input_dir, recursive=args.recursive)
    batches = collect_by_format(files)
    counts = {fmt.value: len(batches[fmt]) for fmt in MODEL_FORMATS}

    console.console.print("🚀 Starting conversion process...")

    builder = RequestBuilder(
        input_dir=input_dir,
        output_dir=output_dir,
        model_type=args.model_type,
        recursive=args.recursive,
        tsx=args.tsx,
        optimize=args.optimize,
        force_overwrite=args.force,
        verbose=args.verbose,
    )
    model_type = builder.resolve_model_type(lambda: prompts.prompt_for_model_type(counts))
    num_expected = sum(
        len(batches[fmt]) for fmt in MODEL_FORMATS if model_type in (fmt.value, ALL)
    )
    if num_expected == 0:
        raise UsageError(f"No {model_type} models found in the input directory")

    _resolve_tsx_and_optimize(builder, settings)
    request = builder.build()

    setup_output_dirs(request, num_expected)
    converters = converters_for(settings, optimize=request.optimize, verbose=request.verbose)

    converted = []
    console.info("Generating .glb files...")
    for fmt in MODEL_FORMATS:
        if request.should_convert(fmt.value):
            outcome = convert_models(fmt, batches[fmt], input_dir, output_dir, request, converters)
            converted.extend(outcome.converted)

    run_component_pass(converted, input_dir, output_dir, request, converters)
    _report(len(converted), num_expected, input_dir, output_dir)
    return 0


def cmd_single(args: argparse.Namespace, settings: Settings) -> int:
    if not args.input_path:
        raise UsageError("Please specify an input path")

    input_path = resolve(args.input_path)
    if is_directory(input_path):
        raise UsageError("Input path should point to a file.")
    if not input_path.is_file():
        raise UsageError(f"Input file does not exist: {input_path}")

    try:
        fmt = format_from_path(input_path)
    except ValueError as e:
        raise UsageError(
            f"Invalid input file type: {str(e).upper() or '(none)'}. "
            "Please provide a .fbx, .obj, or .gltf file"
        )

    console.console.print("🚀 Starting conversion process...")

    input_dir = input_path.parent
    output_dir = input_dir / settings.output_dir_name
    builder = RequestBuilder(
        input_dir=input_dir,
        output_dir=output_dir,
        model_type=fmt.value,
        tsx=args.tsx,
        optimize=args.optimize,
        force_overwrite=args.force,
        verbose=args.verbose,
    )
    _resolve_tsx_and_optimize(builder, settings)
    request = builder.build()

    setup_output_dirs(request, 1)
    converters = converters_for(settings, optimize=request.optimize, verbose=request.verbose)

    console.info("Generating .glb files...")
    outcome = convert_models(fmt, [input_path.name], input_dir, output_dir, request, converters)
    if outcome.errors:
        console.error(f"Could not convert {input_path.name}")
        return 1

    run_component_pass(outcome.converted, input_dir, output_dir, request, converters)
    _report(len(outcome.converted), 1, input_dir, output_dir)
    return 0


def cmd_tsx_gen(args: argparse.Namespace, settings: Settings) -> int:
    console.console.print("🚀 Starting TSX generation process...")
    input_dir = _input_directory(args.input_dir)

    files = list_files(input_dir, recursive=args.recursive)
    glb_files = collect_glb_files(files, settings.output_dir_name)
    if not glb_files:
        raise UsageError("No .glb models found in the input directory")

    output_dir = input_dir / settings.output_dir_name
    builder = RequestBuilder(
        input_dir=input_dir,
        output_dir=output_dir,
        recursive=args.recursive,
        tsx=True,
        optimize=args.optimize,
        force_overwrite=args.force,
        only_tsx=True,
        verbose=args.verbose,
    )
    _resolve_tsx_and_optimize(builder, settings)
    request = builder.build()

    setup_output_dirs(request, len(glb_files))
    converters = converters_for(settings, optimize=request.optimize, verbose=request.verbose)

    outcome = convert_models(Format.GLB, glb_files, input_dir, output_dir, request, converters)
    console.success(
        f"Generated {len(outcome.converted)}/{len(glb_files)} components "
        f'from "{tildify(input_dir)}"'
    )
    console.info(f'Output saved to "{tildify(output_dir)}"')
    return 0


def cmd_clean(args: argparse.Namespace, settings: Settings) -> int:
    input_dir = _input_directory(args.input_dir)
    target = input_dir / settings.output_dir_name

    if not target.is_dir():
        console.info(f"Nothing to clean, {tildify(target)} does not exist")
        return 0

    if not prompts.confirm_removal(tildify(target)):
        raise UserAbort("Aborted, nothing was removed")

    shutil.rmtree(target)
    console.success(f"Removed {tildify(target)}")
    return 0
