import unittest

from sopify.export.policy import (
    COMPLETION_MARKER,
    availability_target,
    export_filename,
    format_date,
    format_datetime,
    resolution_target,
    risk_label,
    sanitize_filename,
    step_label,
)
from sopify.models.sop import CompletedStepSet, SOPStep


class SeverityPolicyTest(unittest.TestCase):
    def test_risk_labels(self):
        self.assertEqual(risk_label("High"), "CRITICAL")
        self.assertEqual(risk_label("Medium"), "MODERATE")
        self.assertEqual(risk_label("Low"), "LOW")

    def test_resolution_targets(self):
        self.assertEqual(resolution_target("High"), "< 30 minutes")
        self.assertEqual(resolution_target("Medium"), "< 60 minutes")
        self.assertEqual(resolution_target("Low"), "< 120 minutes")

    def test_availability_targets(self):
        self.assertEqual(availability_target("High"), "99.9%")
        self.assertEqual(availability_target("Medium"), "99.5%")
        self.assertEqual(availability_target("Low"), "99.0%")

    def test_unknown_severity_rejected(self):
        for fn in (risk_label, resolution_target, availability_target):
            with self.assertRaises(ValueError):
                fn("Critical")


class StepLabelTest(unittest.TestCase):
    def setUp(self):
        self.step = SOPStep(id="step_1", title="Assess Impact")

    def test_marker_only_when_completed(self):
        self.assertEqual(step_label(self.step, CompletedStepSet()), "Assess Impact")
        self.assertEqual(
            step_label(self.step, CompletedStepSet.of(["step_1"])),
            "Assess Impact" + COMPLETION_MARKER,
        )

    def test_other_ids_do_not_mark(self):
        self.assertEqual(step_label(self.step, CompletedStepSet.of(["step_2"])), "Assess Impact")


class FilenameTest(unittest.TestCase):
    def test_sanitize_title(self):
        self.assertEqual(
            sanitize_filename("SOP: Server Down Response Procedure!"),
            "sop_server_down_response_procedure",
        )

    def test_only_alphanumerics_survive(self):
        self.assertRegex(sanitize_filename("Ärger / 3rd-party (API) down"), r"^[a-z0-9_]+$")

    def test_empty_falls_back(self):
        self.assertEqual(sanitize_filename("!!!"), "sop")
        self.assertEqual(sanitize_filename(""), "sop")

    def test_export_filename(self):
        self.assertEqual(export_filename("Disk Full", "pdf"), "disk_full.pdf")
        self.assertEqual(export_filename("Disk Full", ".docx"), "disk_full.docx")


class DateFormatTest(unittest.TestCase):
    def test_format_datetime(self):
        self.assertEqual(format_datetime("2024-01-15T14:30:00Z"), "Jan 15, 2024 02:30 PM")

    def test_unparsable_passthrough(self):
        self.assertEqual(format_datetime("yesterday"), "yesterday")
        self.assertEqual(format_datetime(""), "N/A")

    def test_format_date(self):
        self.assertEqual(format_date("2024-01-15T14:30:00Z"), "Jan 15, 2024")


if __name__ == "__main__":
    unittest.main()
