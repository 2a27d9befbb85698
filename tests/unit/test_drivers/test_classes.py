# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from infinventory.drivers.classes import KNOWN_DEVICE_CLASSES, KnownClassLookup, normalize_guid


@pytest.mark.unit
class TestKnownClassLookup:
    def test_braces_and_case_ignored(self):
        lookup = KnownClassLookup()
        assert lookup("{4D36E972-E325-11CE-BFC1-08002BE10318}") == "Net"
        assert lookup("4d36e968-e325-11ce-bfc1-08002be10318") == "Display"

    def test_unknown_guid(self):
        assert KnownClassLookup()("{00000000-0000-0000-0000-000000000000}") is None

    def test_empty_guid(self):
        assert KnownClassLookup()("") is None

    def test_extra_overrides_and_extends(self):
        lookup = KnownClassLookup(
            {
                "{A0A701C0-A511-42FF-AA6C-06DC0395576F}": "VendorClass",
                "4d36e972-e325-11ce-bfc1-08002be10318": "Network",
                "{11111111-1111-1111-1111-111111111111}": "  ",
            }
        )
        assert lookup("a0a701c0-a511-42ff-aa6c-06dc0395576f") == "VendorClass"
        assert lookup("{4d36e972-e325-11ce-bfc1-08002be10318}") == "Network"
        assert lookup("{11111111-1111-1111-1111-111111111111}") is None
        assert len(lookup) == len(KNOWN_DEVICE_CLASSES) + 1

    def test_normalize_guid(self):
        assert normalize_guid(" {ABC} ") == "abc"
