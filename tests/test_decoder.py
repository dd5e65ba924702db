"""
Tests for the GS1 decoder.

Tests cover:
- Reference payloads (GTIN, SSCC, lot, serial, dates)
- Symbology prefix handling and separator normalization
- Fixed and variable-length framing, truncation
- Skip-on-unrecognized recovery and termination
- Duplicate AIs (last occurrence wins)
"""

import doctest
import random

import pytest
import structlog
from structlog.testing import capture_logs

import gs1_decoder.core.decoder as decoder_module
import gs1_decoder.formatters.json_formatter as json_formatter_module
import gs1_decoder.formatters.values as values_module
from gs1_decoder import (
    decode_gs1,
    DecodeOptions,
    DecodedRecord,
    GS1Decoder,
    IssueCode,
)


GS = "\x1d"


class TestReferencePayloads:
    """Payloads with a known, exact decoding."""

    def test_gtin_expiry_lot(self):
        """(01)12345678901231 (17)190125 (10)ABC123"""
        record = decode_gs1("01123456789012311719012510ABC123")

        assert record.gtin == "12345678901231"
        assert record.expiry_date == "2019-01-25"
        assert record.lot == "ABC123"
        assert record.skipped == 0
        assert record.issues == []

    def test_sscc(self):
        record = decode_gs1("00123456789012345678")

        assert record.sscc == "123456789012345678"
        assert record.gtin is None

    def test_separator_terminates_variable_field(self):
        record = decode_gs1(f"10LOT42{GS}21SN99")

        assert record.lot == "LOT42"
        assert record.serial == "SN99"

    def test_datamatrix_prefix_stripped(self):
        record = decode_gs1("]d20112345678901234")

        assert record.gtin == "12345678901234"
        assert record.symbology_identifier == "GS1 DataMatrix"
        assert record.skipped == 0

    def test_non_gs1_input(self):
        record = decode_gs1("HELLOWORLD")

        assert record.fields() == {}
        assert record.raw == "HELLOWORLD"
        assert record.skipped == 10

    def test_full_pharma_payload(self):
        raw = f"]d2010628509600084217290131{GS}10BATCH-7{GS}21SER123{GS}11240115"
        record = decode_gs1(raw)

        assert record.gtin == "06285096000842"
        assert record.expiry_date == "2029-01-31"
        assert record.lot == "BATCH-7"
        assert record.serial == "SER123"
        assert record.production_date == "2024-01-15"
        assert [e.ai for e in record.elements] == ["01", "17", "10", "21", "11"]
        assert record.skipped == 0


class TestRawField:
    """'raw' is always the untouched input."""

    @pytest.mark.parametrize("raw", [
        "",
        "]d2",
        "]d20112345678901234",
        f"10LOT{GS}21SN",
        "garbage ]d2 in the middle",
        "10A|21B",
    ])
    def test_raw_is_input(self, raw):
        assert decode_gs1(raw).raw == raw

    def test_decoding_is_deterministic(self):
        raw = f"]d20112345678901234{GS}10X1"
        assert decode_gs1(raw).to_dict() == decode_gs1(raw).to_dict()


class TestProperties:
    """Value-level properties over families of inputs."""

    @pytest.mark.parametrize("gtin", [
        "00000000000000",
        "12345678901231",
        "06285096000842",
        "99999999999999",
    ])
    def test_gtin_copied_exactly(self, gtin):
        assert decode_gs1("01" + gtin).gtin == gtin

    @pytest.mark.parametrize("yymmdd,expected", [
        ("190125", "2019-01-25"),
        ("000101", "2000-01-01"),
        ("991231", "2099-12-31"),
        ("280400", "2028-04-00"),
    ])
    def test_expiry_date_expanded(self, yymmdd, expected):
        record = decode_gs1("0112345678901231" + "17" + yymmdd)
        assert record.expiry_date == expected

    def test_best_before_date(self):
        assert decode_gs1("15270301").best_before_date == "2027-03-01"


class TestFraming:
    """Fixed and variable-length extraction."""

    def test_variable_field_runs_to_end(self):
        assert decode_gs1("21ABCDEF").serial == "ABCDEF"

    def test_pipe_is_a_delimiter(self):
        record = decode_gs1("10AB|21CD")

        assert record.lot == "AB"
        assert record.serial == "CD"

    def test_fixed_field_ignores_separator_position(self):
        record = decode_gs1(f"0112345678901231{GS}10LOT")

        assert record.gtin == "12345678901231"
        assert record.lot == "LOT"
        assert record.skipped == 0

    def test_truncated_fixed_field(self):
        record = decode_gs1("0112345")

        assert record.gtin == "12345"
        assert [i.code for i in record.issues] == [IssueCode.TRUNCATED_DATA]

    def test_truncated_date_passes_through(self):
        record = decode_gs1("171901")

        assert record.expiry_date == "1901"
        codes = [i.code for i in record.issues]
        assert IssueCode.TRUNCATED_DATA in codes
        assert IssueCode.INVALID_DATE in codes

    def test_ai_at_end_of_buffer(self):
        record = decode_gs1("10")

        assert record.lot == ""
        assert len(record.elements) == 1

    def test_overlong_variable_value_kept(self):
        lot = "A" * 25
        record = decode_gs1("10" + lot)

        assert record.lot == lot
        assert [i.code for i in record.issues] == [IssueCode.INVALID_LENGTH]

    def test_quantity(self):
        assert decode_gs1(f"3712{GS}").quantity == "12"
        assert decode_gs1("30500").quantity == "500"

    @pytest.mark.parametrize("ai", ["3103", "3100", "3209", "3302"])
    def test_weight_family(self, ai):
        record = decode_gs1("0112345678901231" + ai + "000150")

        assert record.weight == "000150"
        assert record.elements[-1].ai == ai

    def test_element_positions(self):
        record = decode_gs1(f"10LOT42{GS}21SN99")

        first, second = record.elements
        assert (first.start_index, first.end_index) == (0, 8)
        assert (second.start_index, second.end_index) == (8, 14)


class TestDiscardedAIs:
    """Recognized AIs that do not populate a field."""

    def test_packaging_date_discarded(self):
        record = decode_gs1("13240101")

        assert record.fields() == {}
        assert record.elements[0].ai == "13"
        assert record.elements[0].value == "2024-01-01"

    def test_additional_id_consumed(self):
        record = decode_gs1(f"240ABC{GS}10LOT")

        assert record.lot == "LOT"
        assert [e.ai for e in record.elements] == ["240", "10"]


class TestDuplicates:
    """Last occurrence wins."""

    def test_duplicate_lot(self):
        assert decode_gs1(f"10AAA{GS}10BBB").lot == "BBB"

    def test_content_overwrites_gtin(self):
        record = decode_gs1("0112345678901234" + "0298765432109876")
        assert record.gtin == "98765432109876"


class TestRecovery:
    """Unrecognized characters are skipped one at a time."""

    def test_empty_input(self):
        record = decode_gs1("")

        assert isinstance(record, DecodedRecord)
        assert record.fields() == {}
        assert record.skipped == 0
        assert record.issues == []

    def test_prefix_only(self):
        record = decode_gs1("]d2")

        assert record.fields() == {}
        assert record.symbology_identifier == "GS1 DataMatrix"

    def test_skip_run_reported_once(self):
        record = decode_gs1("HELLOWORLD")

        assert len(record.issues) == 1
        assert record.issues[0].code == IssueCode.UNKNOWN_AI
        assert record.issues[0].at_index == 0

    def test_leading_garbage_then_gtin(self):
        record = decode_gs1("XX0112345678901231")

        assert record.gtin == "12345678901231"
        assert record.skipped == 2

    def test_desynchronized_payload(self):
        # '7' after the GTIN is not an AI; scanning resumes inside the data
        record = decode_gs1("0112345678901231719012510ABC123")

        assert record.gtin == "2510ABC123"
        assert record.expiry_date is None
        assert record.lot is None
        assert record.skipped == 3

    def test_long_random_digits_terminate(self):
        rng = random.Random(1234)
        raw = "".join(rng.choice("0123456789") for _ in range(10000))

        record = decode_gs1(raw)

        assert record.raw == raw
        for element in record.elements:
            assert element.end_index > element.start_index

    def test_long_random_text_terminates(self):
        rng = random.Random(99)
        alphabet = "0123456789ABCxyz|]" + GS
        raw = "".join(rng.choice(alphabet) for _ in range(10000))

        assert decode_gs1(raw).raw == raw

    def test_non_string_rejected(self):
        with pytest.raises(TypeError):
            decode_gs1(b"0112345678901231")


class TestOptions:
    """DecodeOptions configuration."""

    def test_keep_symbology_prefix(self):
        options = DecodeOptions(strip_symbology=False)
        record = decode_gs1("]d20112345678901234", options=options)

        assert record.gtin == "12345678901234"
        assert record.symbology_identifier is None
        assert record.skipped == 3

    def test_prefix_not_at_start_is_kept(self):
        record = decode_gs1("01123456789012]d2")
        assert record.gtin == "123456789012]d"

    def test_text_separator(self):
        options = DecodeOptions(gs_characters=frozenset({GS, "<GS>"}))
        record = decode_gs1("10LOT<GS>21SN", options=options)

        assert record.lot == "LOT"
        assert record.serial == "SN"

    def test_additional_symbology_prefix(self):
        options = DecodeOptions(symbology_prefixes=("]d2", "]C1"))
        record = decode_gs1("]C100123456789012345678", options=options)

        assert record.sscc == "123456789012345678"
        assert record.symbology_identifier == "GS1-128"

    def test_decoder_reusable(self):
        decoder = GS1Decoder()

        assert decoder.decode("10A").lot == "A"
        assert decoder.decode("21B").lot is None


class TestEdgeCases:
    """Edge cases found in classification and mapping."""

    def test_non_ascii_digit_is_not_a_weight_ai(self):
        record = decode_gs1("0112345678901231310²000150")

        assert record.gtin == "12345678901231"
        assert record.weight is None
        assert all(e.ai != "310²" for e in record.elements)

    def test_transform_runs_once_per_element(self, monkeypatch):
        calls = []
        original = decoder_module.map_value

        def counting_map_value(entry, value):
            calls.append(entry.ai)
            return original(entry, value)

        monkeypatch.setattr(decoder_module, "map_value", counting_map_value)
        record = decode_gs1("0112345678901231172901310LOT")

        assert calls == [e.ai for e in record.elements]
        assert record.expiry_date == "2029-01-31"


class TestLogging:
    """Structured debug events."""

    def setup_method(self):
        structlog.reset_defaults()

    def test_issues_logged(self):
        with capture_logs() as logs:
            decode_gs1("XX0112345")

        assert len(logs) == 1
        event = logs[0]
        assert event["event"] == "decode_issues"
        assert event["log_level"] == "debug"
        assert event["skipped"] == 2
        assert event["issues"] == ["UNKNOWN_AI", "TRUNCATED_DATA"]
        assert event["elements"] == 1

    def test_clean_payload_not_logged(self):
        with capture_logs() as logs:
            decode_gs1("01123456789012311719012510ABC123")

        assert logs == []


class TestDocExamples:
    """Examples in docstrings are accurate."""

    @pytest.mark.parametrize("module", [
        decoder_module,
        values_module,
        json_formatter_module,
    ])
    def test_module_examples(self, module):
        structlog.reset_defaults()
        failed, attempted = doctest.testmod(module)

        assert attempted > 0
        assert failed == 0
