from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from users.models import Business
from users.services.accounts import (
    BusinessNotFoundError,
    InvalidBusinessStatusError,
    set_business_status,
)

User = get_user_model()


class BusinessApplicationTests(TestCase):
    """
    GUARANTEES:
    - Admins list, approve and reject applications
    - Rejection reason is stored only for REJECTED
    - Unknown applications answer 404
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="pass123",
            role=User.Role.ADMIN,
        )
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="pass123",
            role=User.Role.BUSINESS,
        )
        self.business = Business.objects.create(
            user=self.owner,
            business_name="Lahore Caterers",
            business_type=Business.BusinessType.CATERING,
            address="5 Mall Road",
            city="Lahore",
            state="Punjab",
            zip_code="54000",
            contact_person="Hina",
        )

        self.client.force_authenticate(self.admin)

    def test_pending_applications_listed(self):
        res = self.client.get("/api/auth/business/applications/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["business_name"], "Lahore Caterers")
        self.assertEqual(res.data[0]["user"]["email"], "owner@example.com")

    def test_approve(self):
        res = self.client.post(f"/api/auth/business/applications/{self.business.id}/approve/")

        self.assertEqual(res.status_code, 200)
        owner = User.objects.select_related("business").get(id=self.owner.id)
        self.assertTrue(owner.is_approved_business)

    def test_reject_stores_reason(self):
        res = self.client.post(
            f"/api/auth/business/applications/{self.business.id}/reject/",
            {"reason": "Incomplete documents"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.business.refresh_from_db()
        self.assertEqual(self.business.status, Business.Status.REJECTED)
        self.assertEqual(self.business.rejection_reason, "Incomplete documents")

    def test_reason_cleared_when_approved_later(self):
        set_business_status(
            business_id=self.business.id,
            status=Business.Status.REJECTED,
            reason="Missing license",
        )
        set_business_status(business_id=self.business.id, status=Business.Status.APPROVED)

        self.business.refresh_from_db()
        self.assertEqual(self.business.rejection_reason, "")

    def test_unknown_application_is_404(self):
        res = self.client.post(
            "/api/auth/business/applications/00000000-0000-0000-0000-000000000000/approve/"
        )

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "BUSINESS_NOT_FOUND")

    def test_user_business_status_endpoint(self):
        res = self.client.patch(
            f"/api/auth/users/{self.owner.id}/business-status/",
            {"status": "APPROVED"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["user"]["business_status"], "APPROVED")

    def test_invalid_status_rejected_by_service(self):
        with self.assertRaises(InvalidBusinessStatusError):
            set_business_status(business_id=self.business.id, status="MAYBE")

    def test_missing_business_raises(self):
        with self.assertRaises(BusinessNotFoundError):
            set_business_status(
                business_id="00000000-0000-0000-0000-000000000000",
                status=Business.Status.APPROVED,
            )
