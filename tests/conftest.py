from pathlib import Path

import pytest

from conv3d import prompts
from conv3d.formats import Format
from conv3d.request import ConversionRequest

ENV_KEYS = (
    "FBX2GLTF_PATH",
    "GLTFJSX_COMMAND",
    "CONV3D_TOOL_TIMEOUT",
    "CONV3D_OUTPUT_DIR",
    "CONV3D_OPTIMIZE",
)

PROMPTS = (
    "prompt_for_model_type",
    "prompt_for_tsx_output",
    "prompt_for_optimized_glb_output",
    "confirm_plan",
    "ask_for_file_overwrite",
    "confirm_removal",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the caller's environment and any .env file."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class ScriptedPrompts:
    """Replaces every prompt; unexpected questions fail the test."""

    def __init__(self, monkeypatch):
        self.calls = []
        self.answers = {}
        for name in PROMPTS:
            monkeypatch.setattr(prompts, name, self._answer(name))

    def _answer(self, name):
        def answer(*args):
            self.calls.append((name, args))
            if name not in self.answers:
                raise AssertionError(f"unexpected prompt: {name}")
            value = self.answers[name]
            return value(*args) if callable(value) else value
        return answer

    def count(self, name):
        return sum(1 for called, _ in self.calls if called == name)


@pytest.fixture
def answers(monkeypatch):
    return ScriptedPrompts(monkeypatch)


class FakeConverter:
    def __init__(self, fail=()):
        self.fail = set(fail)
        self.calls = []

    def __call__(self, input_path, output_path):
        self.calls.append((Path(input_path), Path(output_path)))
        if Path(input_path).name in self.fail:
            raise RuntimeError("broken model")
        Path(output_path).write_bytes(b"converted")


@pytest.fixture
def fake_converters():
    return {fmt: FakeConverter() for fmt in (Format.GLTF, Format.FBX, Format.OBJ, Format.GLB)}


@pytest.fixture
def input_dir(tmp_path):
    path = tmp_path / "models"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "out"
    for sub in ("glb", "tsx", "glb-for-web"):
        (path / sub).mkdir(parents=True)
    return path


@pytest.fixture
def request_for(input_dir, output_dir):
    def build(**kwargs):
        return ConversionRequest(input_dir=input_dir, output_dir=output_dir, **kwargs)
    return build


def touch(directory, *names):
    for name in names:
        path = Path(directory) / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("model")
