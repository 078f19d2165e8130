import unittest

from sopify.data.sample_data import SAMPLE_INCIDENTS, SAMPLE_METRICS, incident_history, metrics_for
from sopify.models.incident import INCIDENT_TYPES


class MetricsTest(unittest.TestCase):
    def test_default_range_unchanged(self):
        m = metrics_for("30d")
        self.assertEqual(m["totalSOPs"], 840)
        self.assertEqual(m["complianceRate"], 94.2)

    def test_seven_days(self):
        m = metrics_for("7d")
        self.assertEqual(m["totalSOPs"], 168)
        self.assertEqual(m["complianceRate"], 96.2)

    def test_ninety_days(self):
        m = metrics_for("90d")
        self.assertEqual(m["totalSOPs"], 2940)
        self.assertEqual(m["complianceRate"], 91.2)

    def test_type_filter(self):
        self.assertEqual(metrics_for("30d", "Server Down")["totalSOPs"], 1)
        self.assertEqual(metrics_for("90d", "Server Down")["totalSOPs"], 3)
        self.assertEqual(metrics_for("30d", "Backup Failure")["totalSOPs"], 0)
        self.assertEqual(metrics_for("30d", "all")["totalSOPs"], 840)

    def test_covers_every_incident_type(self):
        self.assertEqual(set(SAMPLE_METRICS["incidentsByType"]), set(INCIDENT_TYPES))

    def test_sample_not_mutated(self):
        m = metrics_for("7d")
        m["incidentsByType"]["Server Down"] = 0
        self.assertEqual(SAMPLE_METRICS["totalSOPs"], 840)
        self.assertEqual(SAMPLE_METRICS["incidentsByType"]["Server Down"], 78)


class HistoryTest(unittest.TestCase):
    def test_first_page(self):
        page = incident_history(limit=2, offset=0)
        self.assertEqual([i["id"] for i in page["incidents"]], ["1", "2"])
        self.assertEqual(page["total"], len(SAMPLE_INCIDENTS))
        self.assertTrue(page["hasMore"])

    def test_last_page(self):
        page = incident_history(limit=10, offset=4)
        self.assertEqual(len(page["incidents"]), 1)
        self.assertFalse(page["hasMore"])


if __name__ == "__main__":
    unittest.main()
