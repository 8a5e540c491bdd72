"""
Unit tests for the Risk Report Builder skill.
"""

from datetime import date

import pytest

from risk_skills.ntp330_calculator import SeverityTier
from risk_skills.risk_report_builder import EmptyReportError, build_report


@pytest.fixture
def sample_records(make_record):
    return [
        make_record(1, name="Electrocution", area="Workshop", nd=10, ne=4, nc=100),  # 4000, I
        make_record(2, name="Falling objects", area="Warehouse", nd=6, ne=3, nc=25),  # 450, III
        make_record(3, name="Noise", area="Press shop", nd=2, ne=1, nc=10),          # 20, IV
    ]


class TestBuildReport:

    def test_empty_collection_raises(self):
        with pytest.raises(EmptyReportError):
            build_report([])

    def test_tier_counts(self, sample_records):
        report = build_report(sample_records, generated_on=date(2026, 10, 19))

        assert report.total == 3
        assert report.count_for(SeverityTier.I) == 1
        assert report.count_for(SeverityTier.II) == 0
        assert report.count_for(SeverityTier.III) == 1
        assert report.count_for(SeverityTier.IV) == 1

    def test_rows_keep_input_order(self, sample_records):
        report = build_report(sample_records)

        assert [row.name for row in report.rows] == ["Electrocution", "Falling objects", "Noise"]
        assert report.rows[1].calculation == "6×3×25"
        assert [d.index for d in report.details] == [1, 2, 3]

    def test_dates_and_filename(self, sample_records):
        report = build_report(sample_records, generated_on=date(2026, 3, 5))

        assert report.generated_on == "5/3/2026"
        assert report.suggested_filename() == "Informe_Riesgos_NTP330_2026-03-05.pdf"


class TestMarkdown:

    def test_markdown_contains_summary_and_table(self, sample_records):
        text = build_report(sample_records, generated_on=date(2026, 10, 19)).to_report()

        assert text.startswith("# Risk Assessment Report")
        assert "Total risks evaluated: 3" in text
        assert "- Level I (Critical): 1" in text
        assert "| Falling objects | Warehouse | 6×3×25 | 450 | Level III | improve if feasible |" in text
        assert "### 3. Noise" in text

    def test_optional_sections_only_when_present(self, make_record):
        text = build_report([make_record(1, name="Dust")]).to_report()

        assert "Description:" not in text
        assert "Preventive measures:" not in text
