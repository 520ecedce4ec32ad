"""
Source config schema (variant fcos, version 1.4.0-experimental)

The human-authored form. Keys are snake_case. Beyond the destination
schema it adds local/inline resource shorthand, directory trees, and
automatic mount units for filesystems.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

VARIANT = "fcos"
VERSION = "1.4.0-experimental"


class SourceModel(BaseModel):
    """Base for source records; unknown keys are rejected"""

    model_config = ConfigDict(extra="forbid")


class HTTPHeader(SourceModel):
    name: str
    value: Optional[str] = None


class Verification(SourceModel):
    hash: Optional[str] = None


class Resource(SourceModel):
    """
    Content reference

    At most one of source, local and inline is set. local is a path
    relative to the files directory; inline is literal text.
    """

    source: Optional[str] = None
    compression: Optional[str] = None
    http_headers: Optional[List[HTTPHeader]] = None
    verification: Optional[Verification] = None
    local: Optional[str] = None
    inline: Optional[str] = None


class ConfigReference(SourceModel):
    merge: Optional[List[Resource]] = None
    replace: Optional[Resource] = None


class Proxy(SourceModel):
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    no_proxy: Optional[List[str]] = None


class TLS(SourceModel):
    certificate_authorities: Optional[List[Resource]] = None


class Security(SourceModel):
    tls: Optional[TLS] = None


class Timeouts(SourceModel):
    http_response_headers: Optional[int] = None
    http_total: Optional[int] = None


class Ignition(SourceModel):
    config: Optional[ConfigReference] = None
    proxy: Optional[Proxy] = None
    security: Optional[Security] = None
    timeouts: Optional[Timeouts] = None


class PasswdUser(SourceModel):
    name: str
    password_hash: Optional[str] = None
    ssh_authorized_keys: Optional[List[str]] = None
    uid: Optional[int] = None
    gecos: Optional[str] = None
    home_dir: Optional[str] = None
    no_create_home: Optional[bool] = None
    primary_group: Optional[str] = None
    groups: Optional[List[str]] = None
    no_user_group: Optional[bool] = None
    no_log_init: Optional[bool] = None
    shell: Optional[str] = None
    system: Optional[bool] = None
    should_exist: Optional[bool] = None


class PasswdGroup(SourceModel):
    name: str
    gid: Optional[int] = None
    password_hash: Optional[str] = None
    system: Optional[bool] = None
    should_exist: Optional[bool] = None


class Passwd(SourceModel):
    users: Optional[List[PasswdUser]] = None
    groups: Optional[List[PasswdGroup]] = None


class Partition(SourceModel):
    label: Optional[str] = None
    number: Optional[int] = None
    size_mib: Optional[int] = None
    start_mib: Optional[int] = None
    type_guid: Optional[str] = None
    guid: Optional[str] = None
    wipe_partition_entry: Optional[bool] = None
    should_exist: Optional[bool] = None
    resize: Optional[bool] = None


class Disk(SourceModel):
    device: str
    wipe_table: Optional[bool] = None
    partitions: Optional[List[Partition]] = None


class Raid(SourceModel):
    name: str
    level: str
    devices: Optional[List[str]] = None
    spares: Optional[int] = None
    options: Optional[List[str]] = None


class Filesystem(SourceModel):
    """
    Filesystem declaration

    with_mount_unit requests a synthesized mount unit for path.
    """

    device: str
    format: Optional[str] = None
    path: Optional[str] = None
    label: Optional[str] = None
    uuid: Optional[str] = None
    wipe_filesystem: Optional[bool] = None
    options: Optional[List[str]] = None
    mount_options: Optional[List[str]] = None
    with_mount_unit: Optional[bool] = None


class NodeUser(SourceModel):
    id: Optional[int] = None
    name: Optional[str] = None


class NodeGroup(SourceModel):
    id: Optional[int] = None
    name: Optional[str] = None


class File(SourceModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    mode: Optional[int] = None
    contents: Optional[Resource] = None
    append: Optional[List[Resource]] = None


class Directory(SourceModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    mode: Optional[int] = None


class Link(SourceModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    target: Optional[str] = None
    hard: Optional[bool] = None


class Tang(SourceModel):
    url: str
    thumbprint: Optional[str] = None


class Custom(SourceModel):
    pin: str
    config: str
    needs_network: Optional[bool] = None


class Clevis(SourceModel):
    custom: Optional[Custom] = None
    tang: Optional[List[Tang]] = None
    threshold: Optional[int] = None
    tpm2: Optional[bool] = None


class Luks(SourceModel):
    name: str
    device: Optional[str] = None
    key_file: Optional[Resource] = None
    label: Optional[str] = None
    uuid: Optional[str] = None
    options: Optional[List[str]] = None
    wipe_volume: Optional[bool] = None
    clevis: Optional[Clevis] = None


class Tree(SourceModel):
    """
    Directory tree declaration

    local is relative to the files directory; path is the destination
    root and defaults to "/".
    """

    local: str
    path: Optional[str] = None


class Storage(SourceModel):
    disks: Optional[List[Disk]] = None
    raid: Optional[List[Raid]] = None
    filesystems: Optional[List[Filesystem]] = None
    files: Optional[List[File]] = None
    directories: Optional[List[Directory]] = None
    links: Optional[List[Link]] = None
    luks: Optional[List[Luks]] = None
    trees: Optional[List[Tree]] = None


class Dropin(SourceModel):
    name: str
    contents: Optional[str] = None


class Unit(SourceModel):
    name: str
    enabled: Optional[bool] = None
    mask: Optional[bool] = None
    contents: Optional[str] = None
    dropins: Optional[List[Dropin]] = None


class Systemd(SourceModel):
    units: Optional[List[Unit]] = None


class Config(SourceModel):
    """Root of a source document"""

    version: Optional[str] = None
    variant: Optional[str] = None
    ignition: Ignition = Field(default_factory=Ignition)
    passwd: Passwd = Field(default_factory=Passwd)
    storage: Storage = Field(default_factory=Storage)
    systemd: Systemd = Field(default_factory=Systemd)
