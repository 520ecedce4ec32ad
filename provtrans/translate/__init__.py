"""Version translators and their passes"""

from .mount_units import add_mount_units, is_remote, mount_unit_from_fs, render_mount_unit
from .node_tracker import NodeKind, NodeTracker
from .resource import resolve_resource, translate_resource
from .trees import expand_tree, process_trees
from .v1_4_exp import new_translator, translate_config, translate_ignition

__all__ = [
    "add_mount_units",
    "is_remote",
    "mount_unit_from_fs",
    "render_mount_unit",
    "NodeKind",
    "NodeTracker",
    "resolve_resource",
    "translate_resource",
    "expand_tree",
    "process_trees",
    "new_translator",
    "translate_config",
    "translate_ignition",
]
