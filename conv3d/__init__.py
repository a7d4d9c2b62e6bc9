"""
conv3d

An interactive CLI tool for converting 3D models (.gltf, .fbx, .obj) to GLB
and generating React components for them.
"""

__version__ = "1.0.0"
__description__ = (
    "An interactive CLI tool for converting 3D models to glTF/GLB "
    "and generating React components"
)
