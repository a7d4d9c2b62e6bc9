import pytest

from conv3d.formats import (
    ALL, FORMAT_CHAIN, MODEL_FORMATS, Format, format_from_path, parse_model_type,
    target_of, validate_chain,
)


def test_every_model_format_converts_to_glb():
    for fmt in MODEL_FORMATS:
        assert target_of(fmt) is Format.GLB
    assert target_of(Format.GLB) is Format.TSX


def test_validate_chain_rejects_missing_target():
    chain = dict(FORMAT_CHAIN)
    del chain[Format.OBJ]
    with pytest.raises(RuntimeError, match="OBJ"):
        validate_chain(chain)


def test_validate_chain_rejects_self_loop():
    chain = dict(FORMAT_CHAIN)
    chain[Format.FBX] = Format.FBX
    with pytest.raises(RuntimeError):
        validate_chain(chain)


@pytest.mark.parametrize("raw, expected", [
    ("gltf", "GLTF"),
    (".OBJ", "OBJ"),
    (" fbx ", "FBX"),
    ("all", ALL),
])
def test_parse_model_type(raw, expected):
    assert parse_model_type(raw) == expected


@pytest.mark.parametrize("raw", ["glb", "stl", ""])
def test_parse_model_type_rejects_unknown(raw):
    with pytest.raises(ValueError):
        parse_model_type(raw)


def test_format_from_path_is_case_insensitive():
    assert format_from_path("model.obj") is Format.OBJ
    assert format_from_path("/tmp/MODEL.OBJ") is Format.OBJ
    assert format_from_path("scene.GlTf") is Format.GLTF


@pytest.mark.parametrize("name", ["model.stl", "model.glb", "model", "dir.v2/model"])
def test_format_from_path_rejects_unsupported(name):
    with pytest.raises(ValueError):
        format_from_path(name)


def test_extension_and_folder():
    assert Format.GLB.extension == ".glb"
    assert Format.TSX.folder == "tsx"
