import pytest

from conv3d.config import DEFAULT_OUTPUT_DIR, load_settings


def test_defaults():
    settings = load_settings()

    assert settings.fbx2gltf == "FBX2glTF"
    assert settings.gltfjsx_command() == ["npx", "--yes", "gltfjsx"]
    assert settings.tool_timeout is None
    assert settings.output_dir_name == DEFAULT_OUTPUT_DIR
    assert settings.optimize is None


def test_dotenv_file(tmp_path):
    (tmp_path / ".env").write_text(
        "FBX2GLTF_PATH=/opt/fbx/FBX2glTF\n"
        "GLTFJSX_COMMAND=node ./node_modules/.bin/gltfjsx\n"
        "CONV3D_TOOL_TIMEOUT=90\n"
        "CONV3D_OPTIMIZE=no\n"
    )

    settings = load_settings()

    assert settings.fbx2gltf == "/opt/fbx/FBX2glTF"
    assert settings.gltfjsx_command() == ["node", "./node_modules/.bin/gltfjsx"]
    assert settings.tool_timeout == 90
    assert settings.optimize is False


def test_environment_wins_over_dotenv(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text("CONV3D_OUTPUT_DIR=from-file\n")
    monkeypatch.setenv("CONV3D_OUTPUT_DIR", "from-env")

    assert load_settings().output_dir_name == "from-env"


def test_zero_timeout_means_none(monkeypatch):
    monkeypatch.setenv("CONV3D_TOOL_TIMEOUT", "0")
    assert load_settings().tool_timeout is None


def test_bad_boolean(monkeypatch):
    monkeypatch.setenv("CONV3D_OPTIMIZE", "maybe")
    with pytest.raises(ValueError):
        load_settings()
