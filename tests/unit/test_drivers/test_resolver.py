# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for DriverMetadataResolver and its fallback chains."""
from __future__ import annotations

import unittest

import pytest

from fakes.fake_logger import FakeLogger
from fixtures.inf_samples import DECORATED_CATALOG_INF, MYCO_INF, NET_INF, NO_MANUFACTURER_INF
from infinventory.drivers.classes import KnownClassLookup
from infinventory.drivers.resolver import (
    DriverMetadataResolver,
    device_hardware_ids,
    first_success,
    manufacturer_entry,
    scan_models,
)
from infinventory.drivers.signing import SigningResult
from infinventory.inf.reader import parse_text


@pytest.mark.unit
class TestFirstSuccess(unittest.TestCase):
    def test_first_non_empty_wins(self):
        self.assertEqual(first_success([lambda: "", lambda: None, lambda: " b ", lambda: "c"]), "b")

    def test_raising_provider_is_skipped(self):
        def boom():
            raise RuntimeError("lookup service down")

        self.assertEqual(first_success([boom, lambda: "fallback"]), "fallback")

    def test_all_fail(self):
        self.assertEqual(first_success([lambda: None]), "")
        self.assertEqual(first_success([]), "")

    def test_later_providers_not_called(self):
        called = []

        def second():
            called.append(True)
            return "x"

        first_success([lambda: "a", second])
        self.assertEqual(called, [])


@pytest.mark.unit
class TestMycoExample(unittest.TestCase):
    def setUp(self):
        self.smap = parse_text(MYCO_INF)

    def test_platforms_and_os(self):
        record = DriverMetadataResolver(list_pnp_ids=True).resolve(self.smap)
        self.assertEqual(record.supported_platforms, {"x64"})
        self.assertEqual(record.supported_os, {"10.0"})
        self.assertIn("*WDG1234", record.pnp_ids)

    def test_pnp_ids_empty_unless_requested(self):
        record = DriverMetadataResolver().resolve(self.smap)
        self.assertEqual(record.pnp_ids, [])
        self.assertEqual(record.supported_platforms, {"x64"})

    def test_version_fields(self):
        record = DriverMetadataResolver().resolve(self.smap)
        self.assertEqual(record.date, "10/01/2023")
        self.assertEqual(record.version, "3.2.1.0")
        self.assertEqual(record.manufacturer, "MyCo")
        self.assertEqual(record.provider, "MyCo")
        self.assertEqual(record.class_guid, "{78a1c341-4539-11d3-b88d-00c04fad5171}")

    def test_unknown_guid_falls_back_to_inf_class(self):
        record = DriverMetadataResolver(KnownClassLookup()).resolve(self.smap)
        self.assertEqual(record.class_name, "Sample")


@pytest.mark.unit
class TestNetDriver(unittest.TestCase):
    def setUp(self):
        self.smap = parse_text(NET_INF)
        self.resolver = DriverMetadataResolver(KnownClassLookup(), list_pnp_ids=True)

    def test_tokens_resolved(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(record.provider, "Contoso Ltd.")
        self.assertEqual(record.manufacturer, "Contoso Ltd.")

    def test_class_name_from_lookup(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(record.class_name, "Net")

    def test_version_annotation_dropped(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(record.date, "10/01/2023")
        self.assertEqual(record.version, "3.2.1.0")

    def test_architectures(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(record.supported_platforms, {"x64", "x86"})
        self.assertEqual(record.supported_os, {"10.0"})

    def test_pnp_ids_deduplicated_in_first_seen_order(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(
            record.pnp_ids,
            ["PCI\\VEN_8086&DEV_1533", "PCI\\VEN_8086&DEV_1539", "PCI\\VEN_8086&DEV_15F3"],
        )

    def test_declared_catalog_when_unsigned(self):
        record = self.resolver.resolve(self.smap)
        self.assertEqual(record.catalog_file, "contosonet.cat")
        self.assertFalse(record.is_signed)
        self.assertEqual(record.digital_signer, "")

    def test_signed_catalog_overrides_declared(self):
        signing = SigningResult(
            is_signed=True,
            catalog_file="foo.cat",
            digital_signer="Microsoft Windows Hardware Compatibility Publisher",
            digital_signer_version="3",
        )
        record = self.resolver.resolve(self.smap, signing)
        self.assertEqual(record.catalog_file, "foo.cat")
        self.assertTrue(record.is_signed)
        self.assertEqual(record.digital_signer, "Microsoft Windows Hardware Compatibility Publisher")
        self.assertEqual(record.digital_signer_version, "3")

    def test_signed_without_catalog_name_keeps_declared(self):
        record = self.resolver.resolve(self.smap, SigningResult(is_signed=True))
        self.assertEqual(record.catalog_file, "contosonet.cat")

    def test_identity_fields_passed_through(self):
        record = self.resolver.resolve(self.smap, name="net.inf", inf_path="net/net.inf", folder_hash="ab12")
        self.assertEqual((record.name, record.inf_path, record.folder_hash), ("net.inf", "net/net.inf", "ab12"))


@pytest.mark.unit
class TestFallbacks(unittest.TestCase):
    def test_failing_class_lookup_falls_back(self):
        def lookup(_guid):
            raise TimeoutError("class service timed out")

        record = DriverMetadataResolver(lookup).resolve(parse_text(NET_INF))
        self.assertEqual(record.class_name, "Net")

    def test_lookup_not_called_without_guid(self):
        calls = []
        smap = parse_text("[Version]\nClass=Custom\n")
        record = DriverMetadataResolver(lambda g: calls.append(g) or "X").resolve(smap)
        self.assertEqual(calls, [])
        self.assertEqual(record.class_name, "Custom")

    def test_decorated_catalog(self):
        record = DriverMetadataResolver().resolve(parse_text(DECORATED_CATALOG_INF))
        self.assertEqual(record.catalog_file, "acme64.cat")
        self.assertEqual(record.class_name, "Ports")

    def test_models_probed_by_base_name(self):
        record = DriverMetadataResolver(list_pnp_ids=True).resolve(parse_text(DECORATED_CATALOG_INF))
        self.assertEqual(record.manufacturer, "Acme")
        self.assertEqual(record.supported_platforms, {"x64"})
        self.assertEqual(record.supported_os, set())
        self.assertEqual(record.pnp_ids, ["ACPI\\ACM0501"])

    def test_models_probed_by_manufacturer_key(self):
        smap = parse_text("[Manufacturer]\nFoo=FooModels,NTx86.6.1\n[Foo.NTx86.6.1]\nDev=Inst,USB\\VID_1234\n")
        record = DriverMetadataResolver(list_pnp_ids=True).resolve(smap)
        self.assertEqual(record.supported_platforms, {"x86"})
        self.assertEqual(record.supported_os, {"6.1"})
        self.assertEqual(record.pnp_ids, ["USB\\VID_1234"])

    def test_decoration_without_section_is_not_reported(self):
        smap = parse_text("[Manufacturer]\nFoo=Foo,NTamd64,NTarm64\n[Foo.NTamd64]\nDev=Inst,X\n")
        record = DriverMetadataResolver().resolve(smap)
        self.assertEqual(record.supported_platforms, {"x64"})

    def test_unknown_arch_reported_as_x86(self):
        smap = parse_text("[Manufacturer]\nFoo=Foo,NTmips.5.0\n[Foo.NTmips.5.0]\nDev=Inst,X\n")
        record = DriverMetadataResolver().resolve(smap)
        self.assertEqual(record.supported_platforms, {"x86"})
        self.assertEqual(record.supported_os, {"5.0"})

    def test_legacy_models_section_contributes_pnp_ids_only(self):
        smap = parse_text("[Manufacturer]\nFoo=Foo\n[Foo]\nDev=Inst,PCI\\OLD\n")
        record = DriverMetadataResolver(list_pnp_ids=True).resolve(smap)
        self.assertEqual(record.pnp_ids, ["PCI\\OLD"])
        self.assertEqual(record.supported_platforms, set())


@pytest.mark.unit
class TestMissingSections(unittest.TestCase):
    def test_no_manufacturer_section(self):
        logger = FakeLogger()
        record = DriverMetadataResolver(KnownClassLookup(), logger=logger).resolve(parse_text(NO_MANUFACTURER_INF))
        self.assertEqual(record.manufacturer, "")
        self.assertEqual(record.supported_platforms, set())
        self.assertEqual(record.provider, "Fabrikam, Inc.")
        self.assertEqual(record.class_name, "System")
        self.assertTrue(any("Manufacturer" in m for m in logger.messages("warning")))

    def test_empty_file(self):
        logger = FakeLogger()
        record = DriverMetadataResolver(logger=logger).resolve(parse_text(""))
        self.assertEqual(record.to_row()["Name"], "")
        self.assertFalse(record.is_signed)
        self.assertEqual(len(logger.messages("warning")), 2)


@pytest.mark.unit
class TestScanHelpers(unittest.TestCase):
    def test_manufacturer_entry_first_key_and_value(self):
        smap = parse_text("[Manufacturer]\nA=ModA,NTamd64 ; note\nB=ModB\n")
        self.assertEqual(manufacturer_entry(smap), ("A", "ModA,NTamd64"))

    def test_manufacturer_entry_none(self):
        self.assertIsNone(manufacturer_entry(parse_text("[Manufacturer]\n")))

    def test_device_hardware_ids_skip_short_entries(self):
        smap = parse_text("[M]\nDev=InstOnly\nDev2=Inst, HW1, COMPAT1\n")
        self.assertEqual(device_hardware_ids(smap["M"]), ["HW1"])

    def test_scan_records_matched_sections(self):
        scan = scan_models(parse_text(MYCO_INF))
        self.assertEqual(scan.sections, ["MyCo.NTamd64.10.0"])

    def test_manufacturer_entry_skips_free_text_line(self):
        smap = parse_text("[Manufacturer]\nstray words\nA=ModA\n")
        self.assertEqual(manufacturer_entry(smap), ("A", "ModA"))

    def test_bare_token_manufacturer_line(self):
        smap = parse_text(
            '[Manufacturer]\n%Mfg%\n'
            '[Mfg]\n%Dev%=Inst,USB\\VID_1234\n'
            '[Strings]\nMfg="Contoso"\n'
        )
        self.assertEqual(manufacturer_entry(smap), ("%Mfg%", "Mfg"))
        record = DriverMetadataResolver(list_pnp_ids=True).resolve(smap)
        self.assertEqual(record.manufacturer, "Contoso")
        self.assertEqual(record.pnp_ids, ["USB\\VID_1234"])

    def test_large_models_section_deduplicates_ids(self):
        n = 10000
        lines = ["[Manufacturer]", "M=M,NTamd64.10.0", "[M.NTamd64.10.0]"]
        lines += [f"Dev{i}=Inst, PCI\\VEN_{i:08X}" for i in range(n)]
        lines += [f"Again{i}=Inst, pci\\ven_{i:08x}" for i in range(0, n, 10)]
        scan = scan_models(parse_text("\n".join(lines)))
        self.assertEqual(len(scan.pnp_ids), n)
        self.assertEqual(scan.pnp_ids[0], "PCI\\VEN_00000000")
        self.assertEqual(scan.pnp_ids[-1], f"PCI\\VEN_{n - 1:08X}")
