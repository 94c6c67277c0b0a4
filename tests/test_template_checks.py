"""Tests for advisory template checks."""
import pytest

from vmtemplate.core.models import APIModel
from vmtemplate.core.template_checks import run_template_checks


def _messages(result):
    return [issue.message for issue in result.warnings]


@pytest.mark.unit
class TestTemplateChecks:
    """Test advisory template checks."""

    def test_clean_templates(self, linux_document, windows_document):
        for document in (linux_document, windows_document):
            result = run_template_checks(APIModel.model_validate(document))

            assert not result.has_errors
            assert not result.has_warnings

    def test_missing_properties_is_error(self):
        result = run_template_checks(APIModel(location="westus"))

        assert result.has_errors
        assert result.errors[0].message == "Template has no properties."

    def test_gallery_and_custom_image(self, linux_document):
        """Test the ambiguous image case is reported but not rejected."""
        linux_document["properties"]["vmProfile"]["osImage"]["url"] = "https://example/os.vhd"

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert not result.has_errors
        assert any("more than one OS source" in m and "gallery_image takes precedence" in m for m in _messages(result))

    def test_image_and_attached_disk(self, linux_document):
        linux_document["properties"]["vmProfile"]["osDisk"] = {"vhd_url": "https://acct/os.vhd"}

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert any("attached_disk" in m for m in _messages(result))

    def test_vmgs_without_vhd(self, windows_document):
        windows_document["properties"]["vmProfile"]["osDisk"]["vhd_url"] = ""

        result = run_template_checks(APIModel.model_validate(windows_document))

        assert any("vmgs_url is set" in m for m in _messages(result))

    def test_linux_without_identity(self, linux_document):
        del linux_document["properties"]["linuxProfile"]

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert "osType is Linux but linuxProfile is missing." in _messages(result)

    def test_windows_without_identity(self, windows_document):
        del windows_document["properties"]["windowsProfile"]

        result = run_template_checks(APIModel.model_validate(windows_document))

        assert "osType is Windows but windowsProfile is missing." in _messages(result)

    def test_both_identities(self, linux_document):
        linux_document["properties"]["windowsProfile"] = {
            "adminUsername": "azureadmin",
            "adminPassword": "P@ssw0rd-not-real",
        }

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert "Both linuxProfile and windowsProfile are set." in _messages(result)

    def test_linux_without_credentials(self, linux_document):
        linux_document["properties"]["linuxProfile"]["sshPublicKeys"] = []

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert "linuxProfile has neither adminPassword nor SSH public keys." in _messages(result)

    def test_linux_password_only(self, linux_document):
        linux = linux_document["properties"]["linuxProfile"]
        linux["sshPublicKeys"] = []
        linux["adminPassword"] = "not-a-real-password"

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert not result.has_warnings

    def test_partial_vnet(self, linux_document):
        linux_document["properties"]["vnetProfile"]["vnetName"] = "shared-vnet"

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert any("partially specified" in m for m in _messages(result))

    def test_duplicate_ports(self, linux_document):
        linux_document["properties"]["vmProfile"]["ports"] = [22, 443, 22]

        result = run_template_checks(APIModel.model_validate(linux_document))

        assert "vmProfile.ports lists duplicates: 22." in _messages(result)

    def test_diagnostics_without_account(self, windows_document):
        windows_document["properties"]["diagnosticsProfile"]["storageAccountName"] = ""

        result = run_template_checks(APIModel.model_validate(windows_document))

        assert "Boot diagnostics are enabled without a storage account name." in _messages(result)

    def test_checks_do_not_modify_template(self, linux_document):
        linux_document["properties"]["vmProfile"]["osImage"]["url"] = "https://example/os.vhd"
        template = APIModel.model_validate(linux_document)
        before = template.model_dump()

        run_template_checks(template)

        assert template.model_dump() == before
