# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the INF structured-text reader."""
from __future__ import annotations

import codecs

import pytest

from fixtures.inf_samples import MYCO_INF, NET_INF
from infinventory.core.exceptions import InfParseError
from infinventory.inf.reader import (
    ANONYMOUS_SECTION,
    TEXT_KEY,
    decode_inf_bytes,
    dump_section_map,
    parse_lines,
    parse_text,
    read_inf_file,
)


@pytest.mark.unit
class TestLineClassification:
    def test_sections_keep_declaration_order(self):
        smap = parse_text("[B]\nx=1\n[A]\ny=2\n[C]\n")
        assert smap.names() == ["B", "A", "C"]

    def test_key_value_trimmed(self):
        smap = parse_text("[S]\n  Key   =   some value  \n")
        assert smap.value("S", "Key") == "some value"

    def test_duplicate_key_concatenates(self):
        smap = parse_text("[S]\nk=A\nk=B\n")
        assert smap.value("S", "k") == "A|B"

    def test_duplicate_key_is_case_insensitive(self):
        smap = parse_text("[S]\nHwId=A\nHWID=B\n")
        assert smap["S"].keys() == ["HwId"]
        assert smap.value("S", "hwid") == "A|B"

    def test_multi_view_of_duplicate_key(self):
        smap = parse_text("[S]\nk=A\nk=B\nk=C\n")
        mv = smap["S"].multi("k")
        assert mv.is_multi
        assert mv.items == ("A", "B", "C")
        assert mv.first == "A"
        assert str(mv) == "A|B|C"

    def test_value_may_be_empty(self):
        smap = parse_text("[S]\nEmpty=\n")
        assert "Empty" in smap["S"]
        assert smap.value("S", "Empty") == ""

    def test_free_text_last_one_wins(self):
        smap = parse_text("[S]\nfirst line\nsecond line\n")
        assert smap.value("S", TEXT_KEY) == "second line"

    def test_blank_lines_ignored(self):
        smap = parse_text("\n\n[S]\n\n\nk=v\n\n")
        assert smap.names() == ["S"]
        assert smap["S"].items() == [("k", "v")]

    def test_content_before_first_header_is_anonymous(self):
        smap = parse_text("top=1\n[S]\nk=v\n")
        assert smap.names() == [ANONYMOUS_SECTION, "S"]
        assert smap[ANONYMOUS_SECTION].anonymous
        assert smap.value(ANONYMOUS_SECTION, "top") == "1"

    def test_no_anonymous_section_when_file_starts_with_header(self):
        smap = parse_text("[S]\nk=v\n")
        assert ANONYMOUS_SECTION not in smap

    def test_section_lookup_is_case_insensitive(self):
        smap = parse_text("[Version]\nClass=Net\n")
        assert "VERSION" in smap
        assert smap.value("version", "class") == "Net"

    def test_reopened_section_appends(self):
        smap = parse_text("[S]\nk=A\n[T]\n[s]\nk=B\n")
        assert smap.names() == ["S", "T"]
        assert smap.value("S", "k") == "A|B"

    def test_header_with_trailing_text(self):
        smap = parse_text("[Strings] ; localized\nx=1\n")
        assert smap.value("Strings", "x") == "1"

    def test_malformed_line_never_raises(self):
        smap = parse_text("[S\n=\n]]]\n[S]\n\x00\x01garbage\n")
        assert isinstance(smap.names(), list)


@pytest.mark.unit
class TestComments:
    def test_comments_dropped_by_default(self):
        smap = parse_text("; header\n[S]\n; note\nk=v\n")
        assert ANONYMOUS_SECTION not in smap
        assert smap["S"].comments == {}

    def test_comments_captured_per_section(self):
        smap = parse_text("; header\n[S]\n; one\nk=v\n; two\n[T]\n; three\n", capture_comments=True)
        assert smap[ANONYMOUS_SECTION].comments == {1: "; header"}
        assert smap["S"].comments == {1: "; one", 2: "; two"}
        assert smap["T"].comments == {1: "; three"}

    def test_comments_do_not_become_entries(self):
        smap = parse_text("[S]\n; k=v\n", capture_comments=True)
        assert len(smap["S"]) == 0


@pytest.mark.unit
class TestRoundTrip:
    @pytest.mark.parametrize("text", [NET_INF, MYCO_INF, "top=1\nloose text\n[S]\nk=A\nk=B\n[Empty]\n"])
    def test_dump_then_parse_is_identity(self, text):
        smap = parse_text(text)
        assert parse_text(dump_section_map(smap)) == smap

    def test_round_trip_with_comments(self):
        smap = parse_text("; top\n[S]\n; c1\nk=v\n", capture_comments=True)
        again = parse_text(dump_section_map(smap), capture_comments=True)
        assert again == smap
        assert again["S"].comments == {1: "; c1"}

    def test_dump_keeps_joined_values(self):
        smap = parse_text("[S]\nk=A\nk=B\n")
        assert "k=A|B" in dump_section_map(smap).splitlines()


@pytest.mark.unit
class TestDecoding:
    def test_utf16_with_bom(self):
        data = codecs.BOM_UTF16_LE + "[Version]\r\nClass=Net\r\n".encode("utf-16-le")
        assert parse_text(decode_inf_bytes(data)).value("Version", "Class") == "Net"

    def test_utf16_without_bom(self):
        data = "[Version]\r\nClass=Net\r\n".encode("utf-16-le")
        assert decode_inf_bytes(data).startswith("[Version]")

    def test_utf8_bom_stripped(self):
        data = codecs.BOM_UTF8 + b"[Version]\n"
        assert decode_inf_bytes(data) == "[Version]\n"

    def test_ansi_fallback(self):
        data = "[Strings]\nName=Café\n".encode("cp1252")
        assert "Café" in decode_inf_bytes(data)

    def test_parse_lines_accepts_iterables(self):
        smap = parse_lines(iter(["[S]", "k = v"]))
        assert smap.value("S", "k") == "v"


@pytest.mark.unit
class TestReadInfFile:
    def test_reads_file(self, tmp_path):
        p = tmp_path / "x.inf"
        p.write_text(MYCO_INF, encoding="utf-8")
        smap = read_inf_file(p)
        assert smap.value("Version", "Provider") == "MyCo"

    def test_missing_file_raises_parse_error(self, tmp_path):
        with pytest.raises(InfParseError) as ei:
            read_inf_file(tmp_path / "missing.inf")
        assert ei.value.context["path"].endswith("missing.inf")
        assert isinstance(ei.value.cause, OSError)
