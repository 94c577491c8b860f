from django.test import TestCase
from rest_framework.test import APIClient


class ContactFormTests(TestCase):
    """
    GUARANTEES:
    - Anyone can send a message
    - Missing fields answer 400
    """

    def setUp(self):
        self.client = APIClient()

    def test_contact_message_accepted(self):
        with self.assertLogs("public.views.contact", level="INFO") as logs:
            res = self.client.post(
                "/api/public/contact/",
                {
                    "name": "Ayesha",
                    "email": "ayesha@example.com",
                    "subject": "Bulk order",
                    "message": "Do you deliver to Islamabad?",
                },
                format="json",
            )

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertIn("Contact message received", logs.output[0])

    def test_missing_fields(self):
        res = self.client.post(
            "/api/public/contact/",
            {"name": "Ayesha", "email": "not-an-email"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data)
        self.assertIn("subject", res.data)
        self.assertIn("message", res.data)
