"""Test configuration for the template model test suite."""

import copy

import pytest


LINUX_DOCUMENT = {
    "vmCategory": "Standard",
    "location": "westus2",
    "properties": {
        "vnetProfile": {
            "vnetAddress": "10.0.0.0/16",
            "subnetAddress": "10.0.0.0/24",
        },
        "vmProfile": {
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
            "secureBoot": False,
        },
        "linuxProfile": {
            "adminUsername": "azureuser",
            "sshPublicKeys": [{"keyData": "ssh-rsa AAAAB3NzaC1yc2E test@example"}],
        },
    },
}


WINDOWS_DOCUMENT = {
    "vmCategory": "ScaleSet",
    "location": "eastus",
    "properties": {
        "vnetProfile": {
            "vnetResourceGroup": "network-rg",
            "vnetName": "shared-vnet",
            "subnetName": "workers",
        },
        "vmProfile": {
            "name": "win-0",
            "osType": "Windows",
            "osDiskType": "Standard_LRS",
            "osDisk": {
                "vhd_url": "https://acct.blob.core.windows.net/vhds/os.vhd",
                "vmgs_url": "https://acct.blob.core.windows.net/vhds/os.vmgs",
                "storage_account_id": "/subscriptions/0000/resourceGroups/rg/providers/Microsoft.Storage/storageAccounts/acct",
            },
            "vmSize": "Standard_D4s_v3",
            "ports": [3389],
            "hasDNSName": False,
            "secureBoot": True,
            "vTPMEnabled": True,
        },
        "windowsProfile": {
            "adminUsername": "azureadmin",
            "adminPassword": "P@ssw0rd-not-real",
        },
        "diagnosticsProfile": {
            "enabled": True,
            "storageAccountName": "diagacct",
            "isNewStorageAccount": True,
        },
    },
}


@pytest.fixture
def linux_document():
    """A Linux template using a gallery image and a managed network."""
    return copy.deepcopy(LINUX_DOCUMENT)


@pytest.fixture
def windows_document():
    """A Windows template attaching an existing disk in a custom VNET."""
    return copy.deepcopy(WINDOWS_DOCUMENT)
