import unittest

from sample_sop import incident_dict, sop_dict

from sopify.models import (
    SOP,
    CompletedStepSet,
    Incident,
    IncidentValidationError,
    SOPValidationError,
)


class IncidentTest(unittest.TestCase):
    def test_valid_incident(self):
        inc = Incident.from_dict(incident_dict())
        self.assertEqual(inc.id, "inc-001")
        self.assertEqual(inc.actions_taken, ("Restart Server", "Notify Team"))
        self.assertEqual(inc.display_type, "Server Down")

    def test_id_and_timestamp_filled(self):
        data = incident_dict()
        del data["id"], data["timestamp"]
        inc = Incident.from_dict(data)
        self.assertTrue(inc.id)
        self.assertTrue(inc.timestamp.endswith("Z"))

    def test_custom_type_required(self):
        with self.assertRaises(IncidentValidationError) as ctx:
            Incident.from_dict(incident_dict(type="Custom"))
        self.assertIn("customType", ctx.exception.errors)

    def test_custom_type_is_display_type(self):
        inc = Incident.from_dict(incident_dict(type="Custom", customType="Payment Gateway Timeout"))
        self.assertEqual(inc.display_type, "Payment Gateway Timeout")

    def test_needs_an_action(self):
        with self.assertRaises(IncidentValidationError) as ctx:
            Incident.from_dict(incident_dict(actionsTaken=[]))
        self.assertIn("actions", ctx.exception.errors)

    def test_custom_actions_alone_are_enough(self):
        inc = Incident.from_dict(incident_dict(actionsTaken=[], customActions=["Page the DBA"]))
        self.assertEqual(inc.all_actions, ["Page the DBA"])

    def test_bad_severity_and_unknown_action(self):
        with self.assertRaises(IncidentValidationError) as ctx:
            Incident.from_dict(incident_dict(severity="Critical", actionsTaken=["Panic"]))
        self.assertIn("severity", ctx.exception.errors)
        self.assertIn("actionsTaken", ctx.exception.errors)

    def test_wrong_field_types_rejected(self):
        for key in ("type", "customType", "severity", "description", "estimatedImpact"):
            with self.assertRaises(IncidentValidationError) as ctx:
                Incident.from_dict(incident_dict(**{key: 5}))
            self.assertEqual(ctx.exception.errors, {key: "Must be text"})

        for key in ("actionsTaken", "customActions", "affectedSystems"):
            with self.assertRaises(IncidentValidationError) as ctx:
                Incident.from_dict(incident_dict(**{key: 5}))
            self.assertIn(key, ctx.exception.errors)

    def test_single_string_action_accepted(self):
        inc = Incident.from_dict(incident_dict(actionsTaken="Escalate"))
        self.assertEqual(inc.actions_taken, ("Escalate",))

    def test_to_dict_camel_case(self):
        out = Incident.from_dict(incident_dict(affectedSystems=["api", "db"])).to_dict()
        self.assertEqual(out["actionsTaken"], ["Restart Server", "Notify Team"])
        self.assertEqual(out["affectedSystems"], ["api", "db"])


class SOPTest(unittest.TestCase):
    def test_decode(self):
        sop = SOP.from_dict(sop_dict())
        self.assertEqual(len(sop.immediate_steps), 3)
        self.assertEqual(len(sop.preventive_actions), 3)
        self.assertEqual(sop.immediate_steps[0].estimated_time, "5 min")

    def test_missing_step_ids_filled(self):
        data = sop_dict()
        for step in data["immediateSteps"]:
            del step["id"]
        del data["preventiveActions"][1]["id"]
        sop = SOP.from_dict(data)
        self.assertEqual([s.id for s in sop.immediate_steps], ["immediate_1", "immediate_2", "immediate_3"])
        self.assertEqual(sop.preventive_actions[1].id, "preventive_2")

    def test_priority_lower_cased(self):
        data = sop_dict()
        data["immediateSteps"][0]["priority"] = "HIGH"
        self.assertEqual(SOP.from_dict(data).immediate_steps[0].priority, "high")

    def test_default_team(self):
        data = sop_dict()
        del data["responsibleTeam"]
        self.assertEqual(SOP.from_dict(data).responsible_team, "Operations Team")

    def test_rejects_bad_shape(self):
        with self.assertRaises(SOPValidationError):
            SOP.from_dict(sop_dict(title=""))
        with self.assertRaises(SOPValidationError):
            SOP.from_dict(sop_dict(severity="Urgent"))
        with self.assertRaises(SOPValidationError):
            SOP.from_dict(sop_dict(immediateSteps="step one"))
        with self.assertRaises(SOPValidationError):
            SOP.from_dict(sop_dict(immediateSteps=[{"id": "x"}]))

    def test_repeated_step_ids_made_unique(self):
        steps = [{"id": "s", "title": "First"}, {"id": "s", "title": "Second"}, {"id": "immediate_2", "title": "Third"}]
        sop = SOP.from_dict(sop_dict(immediateSteps=steps))
        ids = [s.id for s in sop.immediate_steps]
        self.assertEqual(ids, ["s", "immediate_2", "immediate_3"])
        self.assertEqual([s.title for s in sop.immediate_steps], ["First", "Second", "Third"])

    def test_round_trip_keeps_fields(self):
        data = sop_dict()
        self.assertEqual(SOP.from_dict(data).to_dict()["immediateSteps"], data["immediateSteps"])


class CompletedStepSetTest(unittest.TestCase):
    def setUp(self):
        self.sop = SOP.from_dict(sop_dict())

    def test_completion_percentage(self):
        done = CompletedStepSet.of(["step_1", "prev_2"])
        self.assertEqual(done.completed_count(self.sop), 2)
        self.assertEqual(done.completion_percentage(self.sop), 33)

    def test_foreign_ids_ignored(self):
        done = CompletedStepSet.of(["step_1", "not_a_step"])
        self.assertEqual(done.completed_count(self.sop), 1)

    def test_non_list_rejected(self):
        for value in ("step_1", 5, True, {"step_1": True}):
            with self.assertRaises(SOPValidationError):
                CompletedStepSet.of(value)

    def test_tuple_accepted(self):
        self.assertIn("step_1", CompletedStepSet.of(("step_1",)))

    def test_to_list_sorted(self):
        self.assertEqual(CompletedStepSet.of(["prev_2", "step_1"]).to_list(), ["prev_2", "step_1"])


if __name__ == "__main__":
    unittest.main()
