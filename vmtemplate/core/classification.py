"""Provisioning branch classification for cluster resource templates.

The predicates here are the module-level form of the profile methods in
``models``. They accept a missing profile (None) and classify it as False, so
callers can pass ``template.properties.vm_profile`` style lookups straight
through without guarding every level.

Precedence:
    A profile may satisfy several OS source predicates at once. When it does,
    the engine takes the first that holds, in this order:

    1. gallery image (publisher/offer/SKU)
    2. custom OS image URL
    3. attached OS disk
    4. attached OS disk with VMGS only

    When none hold, the OS preset name applies.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .models import APIModel, VMProfile, VnetProfile


class OSSource(str, Enum):
    """Where the VM's OS disk comes from."""
    GALLERY_IMAGE = "gallery_image"
    CUSTOM_IMAGE = "custom_image"
    ATTACHED_DISK = "attached_disk"
    ATTACHED_DISK_VMGS = "attached_disk_vmgs"
    PRESET = "preset"


class NetworkMode(str, Enum):
    """Whether the engine creates the network or reuses the caller's."""
    CUSTOM_VNET = "custom_vnet"
    MANAGED = "managed"


def is_custom_vnet(vnet_profile: Optional[VnetProfile]) -> bool:
    return vnet_profile is not None and vnet_profile.is_custom_vnet()


def has_azure_gallery_image(vm_profile: Optional[VMProfile]) -> bool:
    return vm_profile is not None and vm_profile.has_azure_gallery_image()


def has_custom_os_image(vm_profile: Optional[VMProfile]) -> bool:
    return vm_profile is not None and vm_profile.has_custom_os_image()


def has_attached_os_disk(vm_profile: Optional[VMProfile]) -> bool:
    return vm_profile is not None and vm_profile.has_attached_os_disk()


def has_attached_os_disk_vmgs(vm_profile: Optional[VMProfile]) -> bool:
    return vm_profile is not None and vm_profile.has_attached_os_disk_vmgs()


def has_disks(vm_profile: Optional[VMProfile]) -> bool:
    return vm_profile is not None and vm_profile.has_disks()


_OS_SOURCE_PRECEDENCE = (
    (OSSource.GALLERY_IMAGE, has_azure_gallery_image),
    (OSSource.CUSTOM_IMAGE, has_custom_os_image),
    (OSSource.ATTACHED_DISK, has_attached_os_disk),
    (OSSource.ATTACHED_DISK_VMGS, has_attached_os_disk_vmgs),
)


# VMGS accompanies the attached disk; the pair is one source, not a conflict.
_ATTACHED_SOURCES = frozenset({OSSource.ATTACHED_DISK, OSSource.ATTACHED_DISK_VMGS})


def matching_os_sources(vm_profile: Optional[VMProfile]) -> List[OSSource]:
    """Return every OS source the profile satisfies, in precedence order."""
    return [source for source, predicate in _OS_SOURCE_PRECEDENCE if predicate(vm_profile)]


def select_os_source(vm_profile: Optional[VMProfile]) -> OSSource:
    """Return the OS source that wins under the precedence order."""
    sources = matching_os_sources(vm_profile)
    return sources[0] if sources else OSSource.PRESET


def conflicting_os_sources(vm_profile: Optional[VMProfile]) -> List[OSSource]:
    """Return the matching OS sources when they name more than one origin, else []."""
    sources = matching_os_sources(vm_profile)
    origins = {OSSource.ATTACHED_DISK if s in _ATTACHED_SOURCES else s for s in sources}
    return sources if len(origins) > 1 else []


def select_network_mode(vnet_profile: Optional[VnetProfile]) -> NetworkMode:
    return NetworkMode.CUSTOM_VNET if is_custom_vnet(vnet_profile) else NetworkMode.MANAGED


@dataclass(frozen=True)
class TemplateClassification:
    """Snapshot of every classification answer for one template."""

    custom_vnet: bool
    azure_gallery_image: bool
    custom_os_image: bool
    attached_os_disk: bool
    attached_os_disk_vmgs: bool
    disks: bool
    os_source: OSSource
    network_mode: NetworkMode
    ambiguous_os_sources: List[OSSource] = field(default_factory=list)

    @property
    def is_ambiguous(self) -> bool:
        return bool(self.ambiguous_os_sources)


def classify_template(template: APIModel) -> TemplateClassification:
    """Evaluate all predicates for ``template``.

    A template without properties classifies as a managed network with the
    preset OS and no disks.
    """
    properties = template.properties
    vm_profile = properties.vm_profile if properties is not None else None
    vnet_profile = properties.vnet_profile if properties is not None else None

    sources = matching_os_sources(vm_profile)

    return TemplateClassification(
        custom_vnet=is_custom_vnet(vnet_profile),
        azure_gallery_image=has_azure_gallery_image(vm_profile),
        custom_os_image=has_custom_os_image(vm_profile),
        attached_os_disk=has_attached_os_disk(vm_profile),
        attached_os_disk_vmgs=has_attached_os_disk_vmgs(vm_profile),
        disks=has_disks(vm_profile),
        os_source=sources[0] if sources else OSSource.PRESET,
        network_mode=select_network_mode(vnet_profile),
        ambiguous_os_sources=conflicting_os_sources(vm_profile),
    )
