# Vulture whitelist file
# This file contains false positives that vulture incorrectly flags as dead code.
# These are typically Pydantic fields read by the provisioning engine, settings, pytest fixtures, etc.
#
# Usage: python3 -m vulture vmtemplate tests vulture_whitelist.py

# =============================================================================
# Pydantic Model Fields (read by the provisioning engine after deserialization)
# =============================================================================
# These are template document fields that only the consuming engine reads.
# Vulture sees them as unused class variables.

_.os_name  # VMProfile model field
_.os_disk_type  # VMProfile model field
_.vm_size  # VMProfile model field
_.has_dns_name  # VMProfile model field
_.secure_boot  # VMProfile model field
_.vtpm  # VMProfile model field
_.version  # OSImage model field
_.storage_account_id  # OSDisk model field
_.vnet_address  # VnetProfile model field
_.subnet_address  # VnetProfile model field
_.ssh_public_key  # WindowsProfile model field
_.is_new_storage_account  # DiagnosticsProfile model field

# =============================================================================
# Pydantic model_config (ConfigDict for Pydantic v2 configuration)
# =============================================================================
_.model_config  # Pydantic V2 configuration attribute
_.env_file  # Pydantic settings configuration
_.case_sensitive  # Pydantic settings configuration

# =============================================================================
# Enum Values (selected by documents at runtime)
# =============================================================================
_.SCALE_SET  # VMCategory enum value
_.WINDOWS  # OSType enum value

# =============================================================================
# Pytest Fixtures (discovered by pytest at runtime by name)
# =============================================================================
linux_document  # pytest fixture for a Linux template document
windows_document  # pytest fixture for a Windows template document
caplog  # pytest built-in log capture fixture
tmp_path  # pytest built-in temporary directory fixture
