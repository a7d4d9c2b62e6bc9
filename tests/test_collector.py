from conv3d.collector import collect_by_format, collect_files, collect_glb_files, list_files
from conv3d.formats import Format

from conftest import touch


def test_counts_per_format(input_dir):
    touch(input_dir, "a.gltf", "b.gltf", "c.gltf", "d.fbx", "e.fbx", "notes.txt")

    batches = collect_by_format(list_files(input_dir))

    assert len(batches[Format.GLTF]) == 3
    assert len(batches[Format.FBX]) == 2
    assert len(batches[Format.OBJ]) == 0


def test_extension_match_is_case_sensitive():
    files = ["a.obj", "b.OBJ", "c.obj.bak", "objects.txt"]
    assert collect_files(files, Format.OBJ) == ["a.obj"]


def test_empty_listing_is_valid():
    assert collect_files([], Format.FBX) == []


def test_list_files_skips_directories(input_dir):
    touch(input_dir, "a.obj", "nested/b.obj")
    assert list_files(input_dir) == ["a.obj"]


def test_list_files_recursive(input_dir):
    touch(input_dir, "a.obj", "nested/b.obj", "nested/deeper/c.fbx")

    files = list_files(input_dir, recursive=True)

    assert files == ["a.obj", "nested/b.obj", "nested/deeper/c.fbx"]


def test_glb_files_exclude_previous_output():
    files = [
        "car.glb",
        "sub/boat.glb",
        "_convert-3d-for-web/glb/car.glb",
        "sub/_convert-3d-for-web/glb-for-web/boat.glb",
        "car.gltf",
    ]
    assert collect_glb_files(files, "_convert-3d-for-web") == ["car.glb", "sub/boat.glb"]
