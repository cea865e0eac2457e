"""Component tests for the prometheus endpoints."""

import json
from uuid import uuid4

from django.test import Client, TestCase

from prometheus.models import MockInterviewSession


class TestPrometheusEndpoints(TestCase):
    """Question generation sessions through HTTP."""

    base = "/api/v1/prometheus"

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()

    def generate(self, body):
        """POST a generation request."""
        return self.client.post(
            f"{self.base}/generate", data=json.dumps(body), content_type="application/json"
        )

    def test_health(self):
        """The app reports itself healthy."""
        body = self.client.get(f"{self.base}/health").json()

        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["service"], "prometheus")

    def test_generate_queues_pending_session(self):
        """A pending session is stored and returned with 202."""
        response = self.generate(
            {
                "bookingId": "bk_123",
                "studentEmail": "student@example.com",
                "universities": ["Imperial", "UCL"],
                "metadata": {"packageType": "mmi_pack", "serviceType": "generated"},
            }
        )

        self.assertEqual(response.status_code, 202)
        data = response.json()["data"]
        self.assertEqual(data["bookingId"], "bk_123")
        self.assertEqual(data["status"], "pending")
        self.assertIn("createdAt", data)

        session = MockInterviewSession.objects.get(id=data["id"])
        self.assertEqual(session.universities, ["Imperial", "UCL"])
        self.assertEqual(
            session.metadata, {"packageType": "mmi_pack", "serviceType": "generated"}
        )

    def test_generate_validates_body(self):
        """Email format and non-empty university names are enforced."""
        bad_bodies = [
            {"bookingId": "bk_1", "studentEmail": "nope", "universities": []},
            {"bookingId": "bk_1", "studentEmail": "a@example.com", "universities": [""]},
            {"studentEmail": "a@example.com", "universities": ["UCL"]},
        ]
        for body in bad_bodies:
            with self.subTest(body=body):
                self.assertEqual(self.generate(body).status_code, 400)

    def test_session_lookup(self):
        """Sessions are returned with their results."""
        session = MockInterviewSession.objects.create(
            booking_id="bk_9",
            student_email="student@example.com",
            universities=["KCL"],
            status="completed",
            results={"questions": ["Why medicine?"]},
        )

        data = self.client.get(f"{self.base}/sessions/{session.id}").json()["data"]

        self.assertEqual(data["status"], "completed")
        self.assertEqual(data["results"], {"questions": ["Why medicine?"]})

    def test_session_lookup_errors(self):
        """Malformed ids are 400 and unknown ids 404."""
        response = self.client.get(f"{self.base}/sessions/not-a-uuid")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid session id format")

        response = self.client.get(f"{self.base}/sessions/{uuid4()}")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"], "Session not found")
