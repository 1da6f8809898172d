import unittest

from sitecms.application.requests.submit_request import submit_request
from sitecms.application.requests.transition_request import transition_request
from sitecms.auth.identity import ANONYMOUS_MARKER, Actor
from sitecms.domain.exceptions import BackendUnavailable, IllegalTransition, NotFound, ValidationError
from sitecms.models.service_request import ServiceRequest
from sitecms.utils.timestamps import normalize_ts
from tests.helpers import ADMIN, VISITOR, AppTestCase, at

SERVICE_TYPES = ["appointment", "report"]

FORM = {
    "requester_name": "Grace",
    "requester_email": "grace@example.org",
    "service_type": "report",
    "description": "Street light broken on Main St",
}


class SubmitRequestTests(AppTestCase):
    def test_new_request_starts_as_new(self):
        request = submit_request(
            self.store, tenant_id="demo", actor=VISITOR, data=FORM, service_types=SERVICE_TYPES,
        )

        self.assertEqual(request.status, "New")
        self.assertEqual(request.created_by, VISITOR.user_id)
        self.assertIsNone(request.handled_by)
        self.assertIsNone(request.handled_at)

    def test_anonymous_submission_uses_public_marker(self):
        request = submit_request(
            self.store, tenant_id="demo", actor=None, data=FORM, service_types=SERVICE_TYPES,
        )

        self.assertEqual(request.created_by, ANONYMOUS_MARKER)

    def test_incomplete_form_writes_nothing(self):
        with self.assertRaises(ValidationError):
            submit_request(
                self.store, tenant_id="demo", actor=None,
                data=dict(FORM, description=""), service_types=SERVICE_TYPES,
            )

        self.assertEqual(ServiceRequest.query.count(), 0)


class TransitionRequestTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.request = submit_request(
            self.store, tenant_id="demo", actor=None, data=FORM, service_types=SERVICE_TYPES,
        )
        self.request_id = self.request.id

    def _transition(self, action, **kwargs):
        return transition_request(
            self.store,
            tenant_id=kwargs.pop("tenant_id", "demo"),
            actor=kwargs.pop("actor", ADMIN),
            request_id=self.request_id,
            action=action,
            **kwargs,
        )

    def test_take_in_charge_then_mark_done(self):
        self._transition("take_in_charge", now=at(1))
        second_admin = Actor(user_id="admin-2", role="admin", anonymous=False)
        request = self._transition("mark_done", actor=second_admin, now=at(7))

        self.assertEqual(request.status, "Done")
        self.assertEqual(request.handled_by, "admin-2")
        self.assertEqual(normalize_ts(request.handled_at), at(7))

    def test_observed_statuses_only_move_forward(self):
        observed = []

        def record(rows):
            for row in rows:
                if not observed or observed[-1] != row["status"]:
                    observed.append(row["status"])

        with self.store.live.subscribe("requests", "demo", record):
            self._transition("take_in_charge")
            with self.assertRaises(IllegalTransition):
                self._transition("reopen")
            self._transition("mark_done")
            with self.assertRaises(IllegalTransition):
                self._transition("take_in_charge")

        self.assertEqual(observed, ["New", "InProgress", "Done"])

    def test_cannot_skip_in_progress(self):
        with self.assertRaises(IllegalTransition):
            self._transition("mark_done")

        self.assertEqual(self.store.get("requests", "demo", self.request_id).status, "New")

    def test_racing_admins_both_succeed(self):
        self._transition("take_in_charge", now=at(1))
        other = Actor(user_id="admin-2", role="admin", anonymous=False)
        request = self._transition("take_in_charge", actor=other, now=at(2))

        self.assertEqual(request.status, "InProgress")
        self.assertEqual(request.handled_by, "admin-2")

    def test_requires_identity(self):
        with self.assertRaises(BackendUnavailable):
            self._transition("take_in_charge", actor=None)

    def test_other_site_cannot_touch_request(self):
        with self.assertRaises(NotFound):
            self._transition("take_in_charge", tenant_id="other")


if __name__ == "__main__":
    unittest.main()
