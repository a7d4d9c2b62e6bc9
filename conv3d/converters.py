"""
converters.py

One adapter per source format. Each takes (input_path, output_path), writes
the output file and raises on failure so the dispatcher can record it.

    GLTF -> GLB   pygltflib, buffers and images embedded into the binary blob
    OBJ  -> GLB   trimesh loader and GLB exporter (materials, UVs, textures)
    FBX  -> GLB   FBX2glTF executable
    GLB  -> TSX   gltfjsx generator (optionally also a transformed .glb)

Requirements
------------
- trimesh
- pygltflib
- Pillow (trimesh needs it for .mtl textures)
- FBX2glTF on PATH (or FBX2GLTF_PATH) for .fbx input
- node/npx for .tsx generation
"""

import base64
import mimetypes
import os
import shutil
import subprocess
from contextlib import contextmanager
from functools import partial
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence
from urllib.parse import unquote

import trimesh
from pygltflib import GLTF2, Buffer, BufferFormat, BufferView

from conv3d import console
from conv3d.config import Settings
from conv3d.errors import ConverterError, ToolNotFoundError
from conv3d.formats import Format
from conv3d.paths import WEB_GLB_DIR

Converter = Callable[[Path, Path], None]

FBM_SUFFIX = ".fbm"
TRANSFORMED_SUFFIX = "-transformed.glb"


def run_tool(cmd: Sequence[str], input_path, tool: str,
             timeout: Optional[float] = None, verbose: bool = False):
    """Run an external converter, raising ConverterError with its stderr on failure."""
    if verbose:
        console.info(f"Running: {' '.join(str(part) for part in cmd)}")
    try:
        result = subprocess.run(
            [str(part) for part in cmd],
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise ToolNotFoundError(input_path, tool)
    except subprocess.CalledProcessError as e:
        raise ConverterError(input_path, tool, e.returncode, e.stderr or e.stdout)
    except subprocess.TimeoutExpired:
        raise ConverterError(input_path, tool, stderr=f"timed out after {timeout:g}s")

    if verbose and result.stdout:
        console.console.print(result.stdout.rstrip(), markup=False)
    return result


# --------------------------------------------------------------------------
# GLTF -> GLB
# --------------------------------------------------------------------------

def _pad4(data: bytes) -> bytes:
    return data + b"\x00" * (-len(data) % 4)


def _image_bytes(uri: str, base_dir: Path) -> bytes:
    if uri.startswith("data:"):
        return base64.b64decode(uri.split(",", 1)[1])
    return (base_dir / unquote(uri)).read_bytes()


def embed_images(gltf: GLTF2, base_dir):
    """Move every image given by URI into a bufferView of the binary blob.

    Call after the buffers were converted to the binary blob.
    """
    external = [image for image in gltf.images if image.uri]
    if not external:
        return

    base_dir = Path(base_dir)
    blob = gltf.binary_blob() or b""
    if not gltf.buffers:
        gltf.buffers.append(Buffer(byteLength=0))

    for image in external:
        data = _image_bytes(image.uri, base_dir)
        blob = _pad4(blob)
        gltf.bufferViews.append(BufferView(buffer=0, byteOffset=len(blob), byteLength=len(data)))
        blob += data
        image.mimeType = image.mimeType or mimetypes.guess_type(image.uri)[0] or "image/png"
        image.bufferView = len(gltf.bufferViews) - 1
        image.uri = None

    blob = _pad4(blob)
    gltf.buffers[0].byteLength = len(blob)
    gltf.set_binary_blob(blob)


def convert_single_gltf(input_path, output_path):
    """Pack a .gltf document, its buffers and its images into a single .glb.

    External .bin buffers and image files are resolved relative to the
    .gltf file, so the .glb can be written anywhere.
    """
    input_path = Path(input_path)
    gltf = GLTF2().load(str(input_path))
    if gltf is None:
        raise ValueError(f"Could not read glTF document: {input_path}")
    gltf.convert_buffers(BufferFormat.BINARYBLOB)
    embed_images(gltf, input_path.parent)
    gltf.save_binary(str(output_path))


# --------------------------------------------------------------------------
# OBJ -> GLB
# --------------------------------------------------------------------------

def convert_single_obj(input_path, output_path):
    """Export an .obj (with its .mtl materials and textures) as .glb."""
    scene = trimesh.load(str(input_path), force="scene")
    meshes = [
        geom for geom in scene.geometry.values()
        if isinstance(geom, trimesh.Trimesh) and len(geom.faces) > 0
    ]
    if not meshes:
        raise ValueError("No valid meshes found in the loaded object.")
    scene.export(str(output_path), file_type="glb")


# --------------------------------------------------------------------------
# FBX -> GLB
# --------------------------------------------------------------------------

def fbm_folders(directory) -> set:
    return {
        entry.name for entry in os.scandir(directory)
        if entry.name.endswith(FBM_SUFFIX) and entry.is_dir()
    }


@contextmanager
def fbm_cleanup(directory):
    """Remove the .fbm texture folders that appear while the block runs.

    Folders that existed before are left alone. Cleanup problems are only
    reported, they never replace the result of the block.
    """
    directory = Path(directory)
    before = fbm_folders(directory)
    try:
        yield
    finally:
        try:
            created = sorted(fbm_folders(directory) - before)
        except OSError as e:
            console.warn(f"Could not list {directory} for .fbm cleanup: {e}")
            created = []
        for name in created:
            try:
                shutil.rmtree(directory / name)
            except OSError as e:
                console.warn(f"Could not remove {directory / name}: {e}")


def convert_single_fbx(input_path, output_path, executable: str = "FBX2glTF",
                       timeout: Optional[float] = None, verbose: bool = False):
    input_path = Path(input_path)
    output_path = Path(output_path)
    cmd = [
        executable,
        "--binary",
        "--pbr-metallic-roughness",
        "--input", input_path,
        # FBX2glTF appends the .glb suffix itself
        "--output", output_path.with_suffix(""),
    ]
    with fbm_cleanup(input_path.parent):
        run_tool(cmd, input_path, "FBX2glTF", timeout=timeout, verbose=verbose)

    if not output_path.exists():
        raise ConverterError(input_path, "FBX2glTF", stderr=f"no output written to {output_path}")


# --------------------------------------------------------------------------
# GLB -> TSX
# --------------------------------------------------------------------------

def relocate_transformed_glb(output_path):
    """Move gltfjsx's <name>-transformed.glb into ../glb-for-web/<name>.glb."""
    output_path = Path(output_path)
    transformed = output_path.with_name(output_path.stem + TRANSFORMED_SUFFIX)
    if not transformed.exists():
        console.warn(f"No optimized model was generated for {output_path.name}")
        return None

    web_dir = output_path.parent.parent / WEB_GLB_DIR
    web_dir.mkdir(parents=True, exist_ok=True)
    destination = web_dir / (output_path.stem + Format.GLB.extension)
    shutil.move(str(transformed), str(destination))
    return destination


def prepare_glb_for_web(input_path, output_path, optimize: bool = True,
                        command: Sequence[str] = Settings.gltfjsx,
                        timeout: Optional[float] = None, verbose: bool = False):
    """Generate a typed React component for a .glb.

    With `optimize` gltfjsx also writes a transformed, much smaller .glb,
    which is moved into the glb-for-web folder whether or not generation
    reported an error.
    """
    cmd = [*command, input_path, "--output", output_path, "--types"]
    if optimize:
        cmd.append("--transform")

    try:
        run_tool(cmd, input_path, "gltfjsx", timeout=timeout, verbose=verbose)
    finally:
        if optimize:
            try:
                relocate_transformed_glb(output_path)
            except OSError as e:
                console.warn(f"Could not move optimized model for {Path(output_path).name}: {e}")


def converters_for(settings: Settings, optimize: bool = True,
                   verbose: bool = False) -> Dict[Format, Converter]:
    """Adapters keyed by source format, bound to the current settings."""
    return {
        Format.GLTF: convert_single_gltf,
        Format.FBX: partial(
            convert_single_fbx,
            executable=settings.fbx2gltf,
            timeout=settings.tool_timeout,
            verbose=verbose,
        ),
        Format.OBJ: convert_single_obj,
        Format.GLB: partial(
            prepare_glb_for_web,
            optimize=optimize,
            command=settings.gltfjsx_command(),
            timeout=settings.tool_timeout,
            verbose=verbose,
        ),
    }
