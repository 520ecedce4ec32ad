"""
Mount unit synthesis tests

Tests remote detection, unit rendering and merging with declared units
"""

import pytest

from provtrans.core.path import ContextPath
from provtrans.exceptions.errors import TemplateRenderError
from provtrans.schema import destination as dst
from provtrans.schema import source as src
from provtrans.translate.mount_units import (
    add_mount_units,
    is_remote,
    mount_unit_from_fs,
    render_mount_unit,
)

FS_PATH = ContextPath.new("yaml", "storage", "filesystems", 0, "with_mount_unit")

LOCAL_UNIT = [
    "# Generated by provtrans",
    "[Unit]",
    "Before=local-fs.target",
    "Requires=systemd-fsck@dev-vdb1.service",
    "After=systemd-fsck@dev-vdb1.service",
    "",
    "[Mount]",
    "Where=/var/lib/data",
    "What=/dev/vdb1",
    "Type=ext4",
    "Options=noatime,ro",
    "",
    "[Install]",
    "RequiredBy=local-fs.target",
]

REMOTE_UNIT = [
    "# Generated by provtrans",
    "[Unit]",
    "Before=remote-fs.target",
    "DefaultDependencies=no",
    "Requires=systemd-fsck@dev-mapper-data.service",
    "After=systemd-fsck@dev-mapper-data.service",
    "",
    "[Mount]",
    "Where=/srv",
    "What=/dev/mapper/data",
    "Type=xfs",
    "",
    "[Install]",
    "RequiredBy=remote-fs.target",
]


def json_path(*segments):
    return ContextPath.new("json", *segments)


def tang_luks(name="data"):
    return src.Luks(
        name=name,
        device="/dev/vdc",
        clevis=src.Clevis(tang=[src.Tang(url="http://tang.example.com")]),
    )


@pytest.fixture
def local_fs():
    return src.Filesystem(
        device="/dev/vdb1",
        format="ext4",
        path="/var/lib/data",
        mount_options=["noatime", "ro"],
        with_mount_unit=True,
    )


@pytest.fixture
def remote_fs():
    return src.Filesystem(device="/dev/mapper/data", format="xfs", path="/srv", with_mount_unit=True)


class TestIsRemote:
    """Test network dependency detection"""

    def test_tang_bound_volume(self, remote_fs):
        assert is_remote(remote_fs, [tang_luks()])

    def test_dm_name_device(self):
        fs = src.Filesystem(device="/dev/disk/by-id/dm-name-data")
        assert is_remote(fs, [tang_luks()])

    def test_tpm_only_volume(self, remote_fs):
        luks = src.Luks(name="data", clevis=src.Clevis(tpm2=True))
        assert not is_remote(remote_fs, [luks])

    def test_other_volume_name(self, remote_fs):
        assert not is_remote(remote_fs, [tang_luks("other")])

    def test_plain_device(self, local_fs):
        assert not is_remote(local_fs, [tang_luks()])


class TestMountUnitFromFs:
    """Test unit rendering"""

    def test_local_unit(self, local_fs):
        unit = mount_unit_from_fs(local_fs, False)
        assert unit.name == "var-lib-data.mount"
        assert unit.enabled is True
        assert unit.contents.splitlines() == LOCAL_UNIT

    def test_remote_unit(self, remote_fs):
        unit = mount_unit_from_fs(remote_fs, True)
        assert unit.name == "srv.mount"
        assert unit.contents.splitlines() == REMOTE_UNIT

    def test_no_trailing_newline(self, local_fs, remote_fs):
        """Contents end on the install target line"""
        assert mount_unit_from_fs(local_fs, False).contents.endswith("RequiredBy=local-fs.target")
        assert mount_unit_from_fs(remote_fs, True).contents.endswith("RequiredBy=remote-fs.target")

    def test_missing_path(self):
        with pytest.raises(TemplateRenderError):
            mount_unit_from_fs(src.Filesystem(device="/dev/vdb1", with_mount_unit=True), False)

    def test_missing_parameter(self):
        with pytest.raises(TemplateRenderError):
            render_mount_unit({"remote": False})


class TestAddMountUnits:
    """Test merging synthesized units into the destination"""

    def test_unit_appended(self, local_fs):
        config = src.Config(storage=src.Storage(filesystems=[local_fs]))
        ret = dst.Config(systemd=dst.Systemd(units=[dst.Unit(name="other.service")]))
        ts, r = add_mount_units(config, ret)
        assert r.is_empty()
        assert [u.name for u in ret.systemd.units] == ["other.service", "var-lib-data.mount"]
        for segs in [(), ("name",), ("enabled",), ("contents",)]:
            assert ts.get(json_path("systemd", "units", 1, *segs)).from_path == FS_PATH

    def test_units_section_created(self, local_fs):
        config = src.Config(storage=src.Storage(filesystems=[local_fs]))
        ret = dst.Config()
        add_mount_units(config, ret)
        assert len(ret.systemd.units) == 1

    def test_remote_unit_from_config(self, remote_fs):
        config = src.Config(storage=src.Storage(filesystems=[remote_fs], luks=[tang_luks()]))
        ret = dst.Config()
        add_mount_units(config, ret)
        assert "Before=remote-fs.target" in ret.systemd.units[0].contents

    def test_not_requested(self, local_fs):
        local_fs.with_mount_unit = False
        config = src.Config(storage=src.Storage(filesystems=[local_fs]))
        ret = dst.Config()
        ts, r = add_mount_units(config, ret)
        assert ret.systemd.units is None
        assert len(ts) == 0

    def test_declared_unit_completed(self, local_fs):
        """Only fields the document left unset are filled"""
        config = src.Config(storage=src.Storage(filesystems=[local_fs]))
        ret = dst.Config(systemd=dst.Systemd(units=[dst.Unit(name="var-lib-data.mount", enabled=False)]))
        ts, r = add_mount_units(config, ret)
        assert r.is_empty()
        assert len(ret.systemd.units) == 1
        unit = ret.systemd.units[0]
        assert unit.enabled is False
        assert unit.contents.splitlines() == LOCAL_UNIT
        assert ts.get(json_path("systemd", "units", 0, "contents")).from_path == FS_PATH
        assert json_path("systemd", "units", 0, "enabled") not in ts

    def test_declared_unit_untouched(self, local_fs):
        config = src.Config(storage=src.Storage(filesystems=[local_fs]))
        declared = dst.Unit(name="var-lib-data.mount", enabled=True, contents="[Mount]\n")
        ret = dst.Config(systemd=dst.Systemd(units=[declared]))
        ts, r = add_mount_units(config, ret)
        assert r.is_empty()
        assert len(ts) == 0
        assert ret.systemd.units[0].contents == "[Mount]\n"

    def test_same_path_twice(self, local_fs):
        """A second filesystem at the same mount point never adds a second unit"""
        other = local_fs.model_copy(update={"device": "/dev/vdb2"})
        config = src.Config(storage=src.Storage(filesystems=[local_fs, other]))
        ret = dst.Config()
        add_mount_units(config, ret)
        assert len(ret.systemd.units) == 1
        assert "What=/dev/vdb1" in ret.systemd.units[0].contents

    def test_missing_path_reported(self):
        fs = src.Filesystem(device="/dev/vdb1", with_mount_unit=True)
        config = src.Config(storage=src.Storage(filesystems=[fs]))
        ret = dst.Config()
        _, r = add_mount_units(config, ret)
        assert len(r.errors()) == 1
        assert r.entries[0].path == FS_PATH
        assert ret.systemd.units is None
