"""Advisory checks over a constructed template.

The model accepts several combinations that are legal on the wire but worth a
second look before provisioning (an image URL next to a gallery image, a
Linux VM without a Linux identity). These checks report them without
rejecting the template or changing it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .classification import conflicting_os_sources
from .models import APIModel, OSType


@dataclass
class TemplateIssue:
    """Represents a single template issue."""

    message: str
    hint: Optional[str] = None


@dataclass
class TemplateCheckResult:
    """Outcome of running template checks."""

    errors: List[TemplateIssue] = field(default_factory=list)
    warnings: List[TemplateIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def _warn(result: TemplateCheckResult, message: str, hint: Optional[str] = None) -> None:
    result.warnings.append(TemplateIssue(message=message, hint=hint))


def _error(result: TemplateCheckResult, message: str, hint: Optional[str] = None) -> None:
    result.errors.append(TemplateIssue(message=message, hint=hint))


def run_template_checks(template: APIModel) -> TemplateCheckResult:
    """Check a template for ambiguous or incomplete combinations."""

    result = TemplateCheckResult()
    properties = template.properties

    if properties is None:
        _error(
            result,
            "Template has no properties.",
            "Provide properties with at least vnetProfile and vmProfile.",
        )
        return result

    vm = properties.vm_profile
    vnet = properties.vnet_profile

    # OS source: more than one origin is left to engine precedence.
    conflicts = conflicting_os_sources(vm)
    if conflicts:
        _warn(
            result,
            "vmProfile names more than one OS source: "
            + ", ".join(source.value for source in conflicts)
            + f"; {conflicts[0].value} takes precedence.",
            "Populate only one of osImage (gallery or url) and osDisk.",
        )

    if vm.has_attached_os_disk_vmgs() and not vm.has_attached_os_disk():
        _warn(
            result,
            "osDisk.vmgs_url is set but osDisk.vhd_url is empty.",
            "A VMGS blob accompanies an OS disk; set vhd_url as well.",
        )

    # Identity for the OS type.
    if vm.os_type == OSType.LINUX and properties.linux_profile is None:
        _warn(
            result,
            "osType is Linux but linuxProfile is missing.",
            "Provide linuxProfile with adminUsername and a password or SSH key.",
        )
    if vm.os_type == OSType.WINDOWS and properties.windows_profile is None:
        _warn(
            result,
            "osType is Windows but windowsProfile is missing.",
            "Provide windowsProfile with adminUsername and adminPassword.",
        )
    if properties.linux_profile is not None and properties.windows_profile is not None:
        _warn(
            result,
            "Both linuxProfile and windowsProfile are set.",
            "Only the profile matching osType is used.",
        )

    linux = properties.linux_profile
    if linux is not None and not linux.admin_password and not any(
        key.key_data for key in linux.ssh_public_keys
    ):
        _warn(
            result,
            "linuxProfile has neither adminPassword nor SSH public keys.",
            "Set adminPassword or add at least one sshPublicKeys entry.",
        )

    # Network: all three fields or none.
    vnet_fields = [vnet.vnet_resource_group, vnet.vnet_name, vnet.subnet_name]
    if any(vnet_fields) and not vnet.is_custom_vnet():
        _warn(
            result,
            "vnetProfile is partially specified; a managed network will be created.",
            "Set vnetResourceGroup, vnetName and subnetName together to use an existing VNET.",
        )

    duplicates = sorted({port for port in vm.ports if vm.ports.count(port) > 1})
    if duplicates:
        _warn(
            result,
            "vmProfile.ports lists duplicates: " + ", ".join(str(p) for p in duplicates) + ".",
        )

    diagnostics = properties.diagnostics_profile
    if diagnostics is not None and diagnostics.enabled and not diagnostics.storage_account_name:
        _warn(
            result,
            "Boot diagnostics are enabled without a storage account name.",
            "Set diagnosticsProfile.storageAccountName.",
        )

    return result
