"""
cli.py

Command line entry point.

Example
-------
    conv3d bulk -i ./models -m FBX --no-tsx
    conv3d single -i ./models/chair.obj --tsx
    conv3d tsx-gen -i ./web/models -r --no-optimize
    conv3d clean -i ./models
"""

import argparse
import traceback

from conv3d import __description__, __version__, console
from conv3d.commands import cmd_bulk, cmd_clean, cmd_single, cmd_tsx_gen
from conv3d.config import load_settings
from conv3d.errors import UsageError, UserAbort

PROG = "conv3d"


def _add_global_options(parser: argparse.ArgumentParser, default):
    """Global flags, accepted both before and after the subcommand."""
    tsx = parser.add_mutually_exclusive_group()
    tsx.add_argument("--tsx", dest="tsx", action="store_const", const=True, default=default,
                     help="Create .tsx files")
    tsx.add_argument("--no-tsx", dest="tsx", action="store_const", const=False, default=default,
                     help="Don't create .tsx files")
    optimize = parser.add_mutually_exclusive_group()
    optimize.add_argument("--optimize", dest="optimize", action="store_const", const=True,
                          default=default, help="Create optimized output GLB files")
    optimize.add_argument("--no-optimize", dest="optimize", action="store_const", const=False,
                          default=default, help="Don't create optimized output GLB files")
    parser.add_argument("-f", "--force", action="store_const", const=True, default=default,
                        help="Overwrite existing output files without asking")
    parser.add_argument("-v", "--verbose", action="store_const", const=True, default=default,
                        help="Print external commands and full tracebacks")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description=__description__)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_options(parser, default=None)
    parser.set_defaults(force=False, verbose=False, fn=None)

    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, default=argparse.SUPPRESS)

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    s = sub.add_parser("single", parents=[common],
                       help="Convert a single 3D model from directory")
    s.add_argument("-i", "--input-path", dest="input_path", help="Add the input path to the model")
    s.set_defaults(fn=cmd_single)

    b = sub.add_parser("bulk", parents=[common],
                       help="Convert all 3D models from a directory")
    b.add_argument("-i", "--input-dir", dest="input_dir", help="Add the input directory")
    b.add_argument("-o", "--output-dir", dest="output_dir", help="Specify the output directory")
    b.add_argument("-m", "--model-type", dest="model_type",
                   help="Type of model to convert: GLTF, FBX, OBJ or ALL")
    b.add_argument("-r", "--recursive", action="store_true",
                   help="Find models in directory and subdirectories recursively")
    b.set_defaults(fn=cmd_bulk)

    t = sub.add_parser("tsx-gen", parents=[common],
                       help="Generate .tsx files for 3D models and optimize .glb for web")
    t.add_argument("-i", "--input-dir", dest="input_dir",
                   help="Add the input directory for the files that need to be converted")
    t.add_argument("-r", "--recursive", action="store_true",
                   help="Find models in directory and subdirectories recursively")
    t.set_defaults(fn=cmd_tsx_gen)

    c = sub.add_parser("clean", parents=[common],
                       help="Remove the output folder of a previous run")
    c.add_argument("-i", "--input-dir", dest="input_dir", help="Directory that was converted")
    c.set_defaults(fn=cmd_clean)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.fn is None:
        parser.print_help()
        return 0

    console.banner(PROG, __version__, __description__)

    try:
        settings = load_settings()
        return int(args.fn(args, settings))
    except UserAbort as e:
        console.info(str(e))
        return 0
    except UsageError as e:
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        console.error("Received SIGINT. Exiting program...")
        return 0
    except Exception as e:
        console.error("Conversion process failed!")
        console.error(str(e))
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
