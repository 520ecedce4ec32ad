"""
Destination config schema (spec version 3.3.0-experimental)

The machine-consumed form read by the provisioning agent at first boot.
Field names are snake_case in Python and camelCase on the wire; use
Config.to_dict() or model_dump(by_alias=True, exclude_none=True) to emit
a document.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MAX_VERSION = "3.3.0-experimental"


class DestinationModel(BaseModel):
    """Base for destination records"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HTTPHeader(DestinationModel):
    name: str
    value: Optional[str] = None


class Verification(DestinationModel):
    hash: Optional[str] = None


class Resource(DestinationModel):
    source: Optional[str] = None
    compression: Optional[str] = None
    http_headers: Optional[List[HTTPHeader]] = None
    verification: Optional[Verification] = None


class ConfigReference(DestinationModel):
    merge: Optional[List[Resource]] = None
    replace: Optional[Resource] = None


class Proxy(DestinationModel):
    http_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    no_proxy: Optional[List[str]] = None


class TLS(DestinationModel):
    certificate_authorities: Optional[List[Resource]] = None


class Security(DestinationModel):
    tls: Optional[TLS] = None


class Timeouts(DestinationModel):
    http_response_headers: Optional[int] = None
    http_total: Optional[int] = None


class Ignition(DestinationModel):
    version: Optional[str] = None
    config: Optional[ConfigReference] = None
    proxy: Optional[Proxy] = None
    security: Optional[Security] = None
    timeouts: Optional[Timeouts] = None


class PasswdUser(DestinationModel):
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


class PasswdGroup(DestinationModel):
    name: str
    gid: Optional[int] = None
    password_hash: Optional[str] = None
    system: Optional[bool] = None
    should_exist: Optional[bool] = None


class Passwd(DestinationModel):
    users: Optional[List[PasswdUser]] = None
    groups: Optional[List[PasswdGroup]] = None


class Partition(DestinationModel):
    label: Optional[str] = None
    number: Optional[int] = None
    size_mib: Optional[int] = Field(default=None, alias="sizeMiB")
    start_mib: Optional[int] = Field(default=None, alias="startMiB")
    type_guid: Optional[str] = None
    guid: Optional[str] = None
    wipe_partition_entry: Optional[bool] = None
    should_exist: Optional[bool] = None
    resize: Optional[bool] = None


class Disk(DestinationModel):
    device: str
    wipe_table: Optional[bool] = None
    partitions: Optional[List[Partition]] = None


class Raid(DestinationModel):
    name: str
    level: str
    devices: Optional[List[str]] = None
    spares: Optional[int] = None
    options: Optional[List[str]] = None


class Filesystem(DestinationModel):
    device: str
    format: Optional[str] = None
    path: Optional[str] = None
    label: Optional[str] = None
    uuid: Optional[str] = None
    wipe_filesystem: Optional[bool] = None
    options: Optional[List[str]] = None
    mount_options: Optional[List[str]] = None


class NodeUser(DestinationModel):
    id: Optional[int] = None
    name: Optional[str] = None


class NodeGroup(DestinationModel):
    id: Optional[int] = None
    name: Optional[str] = None


class File(DestinationModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    mode: Optional[int] = None
    contents: Optional[Resource] = None
    append: Optional[List[Resource]] = None


class Directory(DestinationModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    mode: Optional[int] = None


class Link(DestinationModel):
    path: str
    overwrite: Optional[bool] = None
    user: Optional[NodeUser] = None
    group: Optional[NodeGroup] = None
    target: Optional[str] = None
    hard: Optional[bool] = None


class Tang(DestinationModel):
    url: str
    thumbprint: Optional[str] = None


class Custom(DestinationModel):
    pin: str
    config: str
    needs_network: Optional[bool] = None


class Clevis(DestinationModel):
    custom: Optional[Custom] = None
    tang: Optional[List[Tang]] = None
    threshold: Optional[int] = None
    tpm2: Optional[bool] = None


class Luks(DestinationModel):
    name: str
    device: Optional[str] = None
    key_file: Optional[Resource] = None
    label: Optional[str] = None
    uuid: Optional[str] = None
    options: Optional[List[str]] = None
    wipe_volume: Optional[bool] = None
    clevis: Optional[Clevis] = None


class Storage(DestinationModel):
    disks: Optional[List[Disk]] = None
    raid: Optional[List[Raid]] = None
    filesystems: Optional[List[Filesystem]] = None
    files: Optional[List[File]] = None
    directories: Optional[List[Directory]] = None
    links: Optional[List[Link]] = None
    luks: Optional[List[Luks]] = None


class Dropin(DestinationModel):
    name: str
    contents: Optional[str] = None


class Unit(DestinationModel):
    name: str
    enabled: Optional[bool] = None
    mask: Optional[bool] = None
    contents: Optional[str] = None
    dropins: Optional[List[Dropin]] = None


class Systemd(DestinationModel):
    units: Optional[List[Unit]] = None


class Config(DestinationModel):
    """Root of a destination document"""

    ignition: Ignition = Field(default_factory=Ignition)
    passwd: Passwd = Field(default_factory=Passwd)
    storage: Storage = Field(default_factory=Storage)
    systemd: Systemd = Field(default_factory=Systemd)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, unset fields omitted"""
        return self.model_dump(by_alias=True, exclude_none=True)
