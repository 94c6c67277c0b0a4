"""Pydantic models for VM cluster resource templates.

A template document describes the desired compute, storage, network and OS
identity of a VM-based cluster resource. The provisioning engine reads the
document into these models and then asks the profiles which provisioning
branch applies.

Models defined here:
- Root: APIModel, Properties
- Profiles: VMProfile, VnetProfile, LinuxProfile, WindowsProfile, DiagnosticsProfile
- Image and disk references: OSImage, OSDisk, PublicKey

Architecture Note:
    All models are frozen and hashable; sequences are tuples. Wire names
    follow the template document format (camelCase, plus the snake_case keys
    of the attached disk block) and are declared as aliases; Python
    attributes are snake_case. Population by attribute name is allowed for
    programmatic construction.

    The OS source fields (osImage, osDisk) are not mutually exclusive at this
    layer. Each predicate answers one capability question and the engine picks
    the winner; see ``classification.select_os_source``.
"""
from enum import Enum
from typing import Annotated, Any, Optional, Protocol, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictBool,
    StrictInt,
)


# ============================================================================
# Enumerations
# ============================================================================


class VMCategory(str, Enum):
    """Classification of the cluster resource."""
    STANDARD = "Standard"
    SCALE_SET = "ScaleSet"


class OSType(str, Enum):
    """Operating system type of the VM image."""
    LINUX = "Linux"
    WINDOWS = "Windows"


# Strict: strings and booleans are rejected, never coerced to numbers.
Port = Annotated[StrictInt, Field(ge=1, le=65535)]
DiskSize = Annotated[StrictInt, Field(ge=0)]


class _TemplateModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )


# ============================================================================
# Image and Disk References
# ============================================================================


class OSImage(_TemplateModel):
    """OS image reference.

    Either a gallery image addressed by publisher/offer/SKU, or a custom
    image file addressed by URL. Both may be populated in the same document.
    """
    url: str = Field(
        "",
        description="URL of a custom OS image file",
    )
    publisher: str = Field(
        "",
        description="Gallery image publisher",
    )
    offer: str = Field(
        "",
        description="Gallery image offer",
    )
    sku: str = Field(
        "",
        description="Gallery image SKU",
    )
    version: str = Field(
        "",
        description="Gallery image version (optional, platform picks latest when empty)",
    )


class OSDisk(_TemplateModel):
    """Pre-existing managed OS disk to attach instead of provisioning a new one."""
    vhd: str = Field(
        "",
        alias="vhd_url",
        description="URL of the OS disk VHD",
    )
    vmgs: str = Field(
        "",
        alias="vmgs_url",
        description="URL of the VM guest state (VMGS) blob that accompanies the disk",
    )
    storage_account_id: str = Field(
        "",
        description="Resource ID of the storage account holding the blobs",
    )


class PublicKey(_TemplateModel):
    """SSH public key entry."""
    key_data: str = Field(
        "",
        alias="keyData",
        description="Public key material",
    )


# ============================================================================
# Profiles
# ============================================================================


class VMProfile(_TemplateModel):
    """Compute definition of the VM.

    secure_boot and vtpm are tri-state: None means the platform default
    applies, True/False are explicit requests.
    """
    name: str = Field(
        "",
        description="Name of the virtual machine",
    )
    os_type: Optional[OSType] = Field(
        None,
        alias="osType",
        description="Operating system type (Linux or Windows)",
    )
    os_name: str = Field(
        "",
        alias="osName",
        description="Pre-set OS name used when no image or disk source is given",
    )
    os_disk_type: str = Field(
        "",
        alias="osDiskType",
        description="Storage type of the OS disk",
    )
    os_image: Optional[OSImage] = Field(
        None,
        alias="osImage",
        description="Gallery or custom OS image",
    )
    os_disk: Optional[OSDisk] = Field(
        None,
        alias="osDisk",
        description="Existing OS disk to attach",
    )
    disk_sizes_gb: Tuple[DiskSize, ...] = Field(
        default_factory=tuple,
        alias="diskSizesGB",
        description="Sizes of the data disks in gigabytes, in attachment order",
    )
    vm_size: str = Field(
        "",
        alias="vmSize",
        description="VM size identifier",
    )
    ports: Tuple[Port, ...] = Field(
        default_factory=tuple,
        description="Ports to open, each within 1-65535",
    )
    has_dns_name: StrictBool = Field(
        False,
        alias="hasDNSName",
        description="Assign a DNS name to the VM",
    )
    secure_boot: Optional[StrictBool] = Field(
        None,
        alias="secureBoot",
        description="Secure boot request; unset means platform default",
    )
    vtpm: Optional[StrictBool] = Field(
        None,
        alias="vTPMEnabled",
        description="Virtual TPM request; unset means platform default",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "node-0",
                "osType": "Linux",
                "osName": "Ubuntu 22.04",
                "osDiskType": "Premium_LRS",
                "osImage": {
                    "publisher": "canonical",
                    "offer": "ubuntu",
                    "sku": "22.04",
                },
                "diskSizesGB": [128],
                "vmSize": "Standard_D2s_v3",
                "ports": [22, 443],
                "hasDNSName": True,
                "secureBoot": True,
            }
        }
    )

    def has_azure_gallery_image(self) -> bool:
        """Return True if a gallery image is fully addressed by publisher, offer and SKU."""
        image = self.os_image
        return image is not None and bool(image.publisher) and bool(image.offer) and bool(image.sku)

    def has_custom_os_image(self) -> bool:
        """Return True if a custom OS image URL is specified."""
        return self.os_image is not None and bool(self.os_image.url)

    def has_attached_os_disk(self) -> bool:
        """Return True if an existing OS disk VHD is specified."""
        return self.os_disk is not None and bool(self.os_disk.vhd)

    def has_attached_os_disk_vmgs(self) -> bool:
        """Return True if a VMGS blob is specified for the attached disk."""
        return self.os_disk is not None and bool(self.os_disk.vmgs)

    def has_disks(self) -> bool:
        """Return True if any data disks are requested."""
        return len(self.disk_sizes_gb) > 0


class VnetProfile(_TemplateModel):
    """Virtual network definition.

    Leaving the VNET fields empty lets the engine create a managed network.
    """
    vnet_resource_group: str = Field(
        "",
        alias="vnetResourceGroup",
        description="Resource group of an existing virtual network",
    )
    vnet_name: str = Field(
        "",
        alias="vnetName",
        description="Name of an existing virtual network",
    )
    vnet_address: str = Field(
        "",
        alias="vnetAddress",
        description="Address space of the virtual network (CIDR)",
    )
    subnet_name: str = Field(
        "",
        alias="subnetName",
        description="Name of the subnet",
    )
    subnet_address: str = Field(
        "",
        alias="subnetAddress",
        description="Address space of the subnet (CIDR)",
    )

    def is_custom_vnet(self) -> bool:
        """Return True if the caller brought their own VNET.

        Resource group, VNET name and subnet name must all be given; a
        partial set counts as no custom VNET at all.
        """
        return bool(self.vnet_resource_group) and bool(self.vnet_name) and bool(self.subnet_name)


class LinuxProfile(_TemplateModel):
    """Linux admin identity. Key-based auth applies when no password is given."""
    admin_username: str = Field(
        ...,
        alias="adminUsername",
        min_length=1,
        description="Administrator user name",
    )
    admin_password: str = Field(
        "",
        alias="adminPassword",
        repr=False,
        description="Administrator password (optional)",
    )
    ssh_public_keys: Tuple[PublicKey, ...] = Field(
        default_factory=tuple,
        alias="sshPublicKeys",
        description="Authorized SSH public keys for the administrator",
    )


class WindowsProfile(_TemplateModel):
    """Windows admin identity."""
    admin_username: str = Field(
        ...,
        alias="adminUsername",
        min_length=1,
        description="Administrator user name",
    )
    admin_password: str = Field(
        ...,
        alias="adminPassword",
        min_length=1,
        repr=False,
        description="Administrator password",
    )
    ssh_public_key: str = Field(
        "",
        alias="sshPublicKey",
        description="SSH public key for the administrator (optional)",
    )


class DiagnosticsProfile(_TemplateModel):
    """Boot diagnostics collection settings."""
    # Older documents carry the flag under the literal key "true".
    enabled: StrictBool = Field(
        False,
        validation_alias=AliasChoices("enabled", "true"),
        serialization_alias="enabled",
        description="Collect boot diagnostics",
    )
    storage_account_name: str = Field(
        "",
        alias="storageAccountName",
        description="Storage account receiving diagnostics data",
    )
    is_new_storage_account: StrictBool = Field(
        False,
        alias="isNewStorageAccount",
        description="Storage account is created by this provisioning operation",
    )


# ============================================================================
# Root
# ============================================================================


class Properties(_TemplateModel):
    """Cluster resource definition.

    Exactly one of linux_profile/windows_profile is expected for the VM's
    OS type. The model does not enforce it; see ``template_checks``.
    """
    vnet_profile: VnetProfile = Field(
        ...,
        alias="vnetProfile",
        description="Network definition",
    )
    vm_profile: VMProfile = Field(
        ...,
        alias="vmProfile",
        description="Compute definition",
    )
    linux_profile: Optional[LinuxProfile] = Field(
        None,
        alias="linuxProfile",
        description="Linux admin identity",
    )
    windows_profile: Optional[WindowsProfile] = Field(
        None,
        alias="windowsProfile",
        description="Windows admin identity",
    )
    diagnostics_profile: Optional[DiagnosticsProfile] = Field(
        None,
        alias="diagnosticsProfile",
        description="Boot diagnostics settings",
    )


class VMConfigurator(Protocol):
    """Provisioning-engine strategy carried alongside a template.

    Supplied by the engine that builds the model. Nothing in this package
    inspects or calls it.
    """


class APIModel(_TemplateModel):
    """Root of a cluster resource template document.

    The configurator is not part of the document. Pass it as a keyword when
    constructing the model, or attach it to a parsed model with
    ``with_configurator``.
    """
    vm_category: Optional[VMCategory] = Field(
        None,
        alias="vmCategory",
        description="Category of the cluster resource",
    )
    location: str = Field(
        "",
        description="Region where the resource is provisioned",
    )
    properties: Optional[Properties] = Field(
        None,
        description="Resource definition",
    )

    _configurator: Optional[VMConfigurator] = PrivateAttr(default=None)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vmCategory": "Standard",
                "location": "westus2",
                "properties": {
                    "vnetProfile": {},
                    "vmProfile": {
                        "name": "node-0",
                        "osType": "Linux",
                        "vmSize": "Standard_D2s_v3",
                    },
                    "linuxProfile": {
                        "adminUsername": "azureuser",
                        "sshPublicKeys": [{"keyData": "ssh-rsa AAAA..."}],
                    },
                },
            }
        }
    )

    def __init__(self, configurator: Optional[VMConfigurator] = None, **data: Any) -> None:
        super().__init__(**data)
        self._configurator = configurator

    @property
    def configurator(self) -> Optional[VMConfigurator]:
        return self._configurator

    def with_configurator(self, configurator: Optional[VMConfigurator]) -> "APIModel":
        """Return a copy of this model carrying ``configurator``."""
        clone = self.model_copy()
        clone._configurator = configurator
        return clone
