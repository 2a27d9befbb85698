# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

import pytest

from infinventory.inf.values import MultiValue, fields, join_multi, split_multi, strip_annotation


@pytest.mark.unit
class TestValueHelpers:
    def test_join_and_split(self):
        assert join_multi("A", "B") == "A|B"
        assert split_multi("A|B") == ["A", "B"]
        assert split_multi("A") == ["A"]

    def test_strip_annotation(self):
        assert strip_annotation(" 3.2.1.0 ; build 7 ") == "3.2.1.0"
        assert strip_annotation("") == ""

    def test_fields(self):
        assert fields("Widget , *WDG1234,  compat ") == ["Widget", "*WDG1234", "compat"]

    def test_multivalue(self):
        assert MultiValue.parse("x").is_multi is False
        assert MultiValue.parse("x|y").first == "x"
        assert MultiValue(()).first == ""
