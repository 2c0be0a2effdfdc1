from __future__ import annotations

import json

import pytest

from mockbanker.descriptors import resolve_domain
from mockbanker.domain.rows import BankAccountRow, DriverLicenseRow, IbanRow, TaxIdRow
from mockbanker.exporter import MIME_TYPES, copy_all_text, export, to_csv, to_json, to_sql

IBANS = (
    IbanRow(raw="DE89370400440532013000", formatted="DE89 3704 0044 0532 0130 00", valid=True),
    IbanRow(raw="GB82WEST12345698765432", formatted="GB82 WEST 1234 5698 7654 32", valid=False),
)


class TestCsv:
    def test_iban_csv_uses_formatted_value_when_spacing(self):
        csv = to_csv(resolve_domain("iban"), IBANS, spaces=True)
        assert csv == (
            "IBAN,Valid\n"
            "DE89 3704 0044 0532 0130 00,Yes\n"
            "GB82 WEST 1234 5698 7654 32,No\n"
        )

    def test_iban_csv_uses_raw_value_without_spacing(self):
        csv = to_csv(resolve_domain("iban"), IBANS, spaces=False)
        assert csv.splitlines()[1] == "DE89370400440532013000,Yes"

    def test_optional_fields_render_empty(self):
        rows = [DriverLicenseRow(code="A1", name="Juhiluba", country="EE", state=None, valid=True)]
        csv = to_csv(resolve_domain("driver_license"), rows)
        assert csv.splitlines() == ["Code,Name,Country,State,Valid", "A1,Juhiluba,EE,,Yes"]

    def test_no_escaping_of_embedded_delimiters(self):
        rows = [TaxIdRow(code="1,2", name='N"1', holder_type="company", country="BR", valid=True)]
        line = to_csv(resolve_domain("tax_id"), rows).splitlines()[1]
        assert line == '1,2,N"1,company,BR,Yes'

    def test_empty_snapshot_has_header_only(self):
        assert to_csv(resolve_domain("passport"), []) == "Code,Name,Country,Valid\n"


class TestJson:
    def test_round_trip_preserves_rows_and_order(self):
        parsed = json.loads(to_json(IBANS))
        assert [IbanRow(**item) for item in parsed] == list(IBANS)
        assert list(parsed[0]) == ["raw", "formatted", "valid"]

    def test_pretty_printed_with_two_spaces(self):
        assert to_json(IBANS[:1]).startswith('[\n  {\n    "raw": ')

    def test_none_is_null(self):
        rows = [DriverLicenseRow(code="X", name="N", country="DE", valid=False)]
        assert json.loads(to_json(rows))[0]["state"] is None


class TestSql:
    def test_iban_table_uses_raw_values(self):
        sql = to_sql(resolve_domain("iban"), IBANS)
        assert sql.splitlines() == [
            "CREATE TABLE IF NOT EXISTS ibans (iban TEXT, valid BOOLEAN);",
            "INSERT INTO ibans (iban, valid) VALUES ('DE89370400440532013000', true);",
            "INSERT INTO ibans (iban, valid) VALUES ('GB82WEST12345698765432', false);",
        ]

    def test_bank_accounts(self):
        rows = [BankAccountRow(account="12345678", routing="111000025", valid=True)]
        assert to_sql(resolve_domain("bank_account"), rows).splitlines()[1] == (
            "INSERT INTO bank_accounts (account, routing, valid) VALUES ('12345678', '111000025', true);"
        )

    def test_missing_optional_text_is_empty_literal(self):
        rows = [TaxIdRow(code="123", name="DNI", country="ES", valid=True)]
        assert "VALUES ('123', 'DNI', '', 'ES', true);" in to_sql(resolve_domain("tax_id"), rows)


class TestArtifacts:
    @pytest.mark.parametrize("fmt", ["csv", "json", "sql"])
    def test_filename_and_mime(self, fmt):
        artifact = export(resolve_domain("lei"), [], fmt)
        assert artifact.filename == f"lei_codes.{fmt}"
        assert artifact.mime_type == MIME_TYPES[fmt]

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown export format"):
            export(resolve_domain("lei"), [], "xml")  # type: ignore[arg-type]

    def test_serializers_are_deterministic(self):
        descriptor = resolve_domain("iban")
        assert export(descriptor, IBANS, "sql") == export(descriptor, IBANS, "sql")


def test_copy_all_text_honours_spacing_and_routing():
    assert copy_all_text(IBANS, spaces=False) == "DE89370400440532013000\nGB82WEST12345698765432"
    accounts = [
        BankAccountRow(account="12345678", routing="111000025", valid=True),
        BankAccountRow(account="99", routing="", valid=True),
    ]
    assert copy_all_text(accounts) == "12345678 (111000025)\n99"
