"""
Mount unit synthesis

Filesystems declared with with_mount_unit get a generated systemd mount
unit. Filesystems on a LUKS volume unlocked through Tang are remote and
order against the network; everything else orders against local-fs.
A unit the document already declares under the same name is completed
rather than duplicated.
"""

from typing import Any, Dict, List, Tuple

from jinja2 import Environment, StrictUndefined, TemplateError

from ..core.path import ContextPath
from ..core.report import Report
from ..core.translation import TranslationSet
from ..exceptions.errors import TemplateRenderError
from ..schema import destination as dst
from ..schema import source as src
from ..utils.logging import get_logger
from ..utils.systemd import mount_unit_name, unit_name_path_escape
from .resource import DEST_TAG, SOURCE_TAG

logger = get_logger(__name__)

MOUNT_UNIT_TEMPLATE = """\
# Generated by provtrans
[Unit]
{% if remote %}
Before=remote-fs.target
DefaultDependencies=no
{% else %}
Before=local-fs.target
{% endif %}
Requires=systemd-fsck@{{ escaped_device }}.service
After=systemd-fsck@{{ escaped_device }}.service

[Mount]
Where={{ path }}
What={{ device }}
Type={{ fs_type }}
{% if mount_options %}
Options={{ mount_options | join(",") }}
{% endif %}

[Install]
{% if remote %}
RequiredBy=remote-fs.target
{%- else %}
RequiredBy=local-fs.target
{%- endif %}
"""

_jinja = Environment(
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)
_template = _jinja.from_string(MOUNT_UNIT_TEMPLATE)

_MAPPER_PREFIXES = ("/dev/mapper/", "/dev/disk/by-id/dm-name-")


def is_remote(fs: src.Filesystem, luks: List[src.Luks]) -> bool:
    """
    Whether fs sits on a LUKS volume bound to a Tang server

    Only device-mapper paths are considered; they are matched against
    the names the LUKS volumes are opened under.
    """
    if not fs.device.startswith(_MAPPER_PREFIXES):
        return False
    for volume in luks:
        if fs.device not in (prefix + volume.name for prefix in _MAPPER_PREFIXES):
            continue
        if volume.clevis is not None and volume.clevis.tang:
            return True
    return False


def mount_unit_params(fs: src.Filesystem, remote: bool) -> Dict[str, Any]:
    """Explicit template parameters for a filesystem's mount unit"""
    return {
        "remote": remote,
        "escaped_device": unit_name_path_escape(fs.device),
        "path": fs.path,
        "device": fs.device,
        "fs_type": fs.format,
        "mount_options": list(fs.mount_options or []),
    }


def render_mount_unit(params: Dict[str, Any]) -> str:
    """
    Render unit contents

    Raises:
        TemplateRenderError: A parameter is missing or rendering failed
    """
    try:
        return _template.render(**params)
    except TemplateError as e:
        raise TemplateRenderError(f"failed to render mount unit: {e}", dict(params)) from e


def mount_unit_from_fs(fs: src.Filesystem, remote: bool) -> dst.Unit:
    """
    Build the enabled mount unit for fs

    Raises:
        TemplateRenderError: fs has no mount path, or rendering failed
    """
    if not fs.path:
        raise TemplateRenderError("filesystem has no path to mount", {"device": fs.device})
    contents = render_mount_unit(mount_unit_params(fs, remote))
    return dst.Unit(name=mount_unit_name(fs.path), enabled=True, contents=contents)


def add_mount_units(config: src.Config, ret: dst.Config) -> Tuple[TranslationSet, Report]:
    """
    Synthesize mount units for filesystems requesting one

    Args:
        config: Source document
        ret: Destination document; its unit list is modified in place

    Returns:
        (TranslationSet, Report) with absolute paths
    """
    ts = TranslationSet(SOURCE_TAG, DEST_TAG)
    r = Report()
    filesystems = config.storage.filesystems or []
    if not filesystems:
        return ts, r

    units = ret.systemd.units or []
    unit_map = {u.name: i for i, u in enumerate(units)}
    luks = config.storage.luks or []

    for i, fs in enumerate(filesystems):
        if not fs.with_mount_unit:
            continue
        from_path = ContextPath.new(SOURCE_TAG, "storage", "filesystems", i, "with_mount_unit")
        try:
            new_unit = mount_unit_from_fs(fs, is_remote(fs, luks))
        except TemplateRenderError as e:
            r.add_on_error(from_path, e)
            continue

        existing = unit_map.get(new_unit.name)
        if existing is not None:
            # only fill what the document left unset
            u = units[existing]
            unit_path = ContextPath.new(DEST_TAG, "systemd", "units", existing)
            if u.contents is None:
                u.contents = new_unit.contents
                ts.add_translation(from_path, unit_path.append("contents"))
            if u.enabled is None:
                u.enabled = new_unit.enabled
                ts.add_translation(from_path, unit_path.append("enabled"))
            logger.debug("completed declared mount unit", unit=new_unit.name)
        else:
            unit_path = ContextPath.new(DEST_TAG, "systemd", "units", len(units))
            units.append(new_unit)
            unit_map[new_unit.name] = len(units) - 1
            ts.add_from_common_source(from_path, unit_path, new_unit)
            logger.debug("added mount unit", unit=new_unit.name)

    if units:
        ret.systemd.units = units
    return ts, r
