"""
formats.py

Source formats and the fixed chain each one is converted along:

    GLTF -> GLB
    FBX  -> GLB
    OBJ  -> GLB
    GLB  -> TSX
"""

import os
from enum import Enum


class Format(str, Enum):
    GLTF = "GLTF"
    FBX = "FBX"
    OBJ = "OBJ"
    GLB = "GLB"
    TSX = "TSX"

    @property
    def extension(self) -> str:
        return "." + self.value.lower()

    @property
    def folder(self) -> str:
        return self.value.lower()


# Formats offered for model conversion, in prompt order.
MODEL_FORMATS = (Format.GLTF, Format.FBX, Format.OBJ)
ALL = "ALL"

FORMAT_CHAIN = {
    Format.GLTF: Format.GLB,
    Format.FBX: Format.GLB,
    Format.OBJ: Format.GLB,
    Format.GLB: Format.TSX,
}


def validate_chain(chain=FORMAT_CHAIN):
    """Every convertible format must map to a known, different format."""
    for source in (*MODEL_FORMATS, Format.GLB):
        if source not in chain:
            raise RuntimeError(f"No conversion target registered for {source.value}")
        target = chain[source]
        if not isinstance(target, Format) or target is source:
            raise RuntimeError(f"Invalid conversion target for {source.value}: {target!r}")


def target_of(fmt: Format) -> Format:
    return FORMAT_CHAIN[fmt]


def parse_model_type(value: str) -> str:
    """Normalize user input like "obj", ".OBJ" or "all" to a model type key.

    Raises ValueError for anything that is not a model format or ALL.
    """
    key = value.strip().upper().lstrip(".")
    if key == ALL:
        return ALL
    if key in {fmt.value for fmt in MODEL_FORMATS}:
        return key
    raise ValueError(value)


def format_from_path(path) -> Format:
    """Infer the model format from a file extension, case-insensitively."""
    suffix = os.path.splitext(str(path))[1].lstrip(".")
    try:
        fmt = Format(suffix.upper())
    except ValueError:
        raise ValueError(suffix)
    if fmt not in MODEL_FORMATS:
        raise ValueError(suffix)
    return fmt


validate_chain()
