"""HTTP tests for the loan listing endpoints."""
import unittest

from bson import ObjectId

from fakes import make_client
from main import app


def _loan(title="Seed capital", created_by="lender@x.com", **extra):
    return {
        "title": title,
        "description": "Small business loan",
        "interestRate": 7.5,
        "category": "business",
        "maxLoan": 5000,
        "image": "https://img.example/loan.png",
        "createdBy": created_by,
        **extra,
    }


class TestLoansApi(unittest.TestCase):
    def setUp(self):
        self.client, self.store, _ = make_client()

    def tearDown(self):
        app.dependency_overrides.clear()

    def _create(self, **kwargs) -> str:
        response = self.client.post("/loans", json=_loan(**kwargs))
        self.assertEqual(response.status_code, 200)
        return response.json()["insertedId"]

    def test_create_and_fetch(self):
        loan_id = self._create()
        response = self.client.get(f"/loans/{loan_id}")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["_id"], loan_id)
        self.assertEqual(data["title"], "Seed capital")

    def test_limit_caps_results(self):
        for i in range(5):
            self._create(title=f"Loan {i}")
        self.assertEqual(len(self.client.get("/loans", params={"limit": 2}).json()), 2)
        self.assertEqual(len(self.client.get("/loans").json()), 5)
        self.assertEqual(len(self.client.get("/loans", params={"limit": 0}).json()), 5)

    def test_negative_limit_rejected(self):
        response = self.client.get("/loans", params={"limit": -1})
        self.assertEqual(response.status_code, 422)
        self.assertIn("error", response.json())

    def test_filter_by_creator(self):
        self._create(created_by="a@x.com")
        self._create(created_by="b@x.com")
        self._create(created_by="a@x.com")
        loans = self.client.get("/loans", params={"createdBy": "a@x.com"}).json()
        self.assertEqual(len(loans), 2)
        self.assertTrue(all(l["createdBy"] == "a@x.com" for l in loans))

    def test_get_missing_and_malformed(self):
        missing = self.client.get(f"/loans/{ObjectId()}")
        self.assertEqual(missing.status_code, 404)
        self.assertEqual(missing.json(), {"error": "Loan not found"})
        malformed = self.client.get("/loans/123")
        self.assertEqual(malformed.status_code, 400)
        self.assertIn("error", malformed.json())

    def test_put_replaces_editable_fields(self):
        loan_id = self._create()
        response = self.client.put(
            f"/loans/{loan_id}",
            json={"title": "Bigger", "description": "d", "interestRate": "9.25", "category": "c", "maxLoan": "12000", "image": None},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "modifiedCount": 1})
        loan = self.client.get(f"/loans/{loan_id}").json()
        self.assertEqual(loan["interestRate"], 9.25)
        self.assertEqual(loan["maxLoan"], 12000.0)
        self.assertEqual(loan["createdBy"], "lender@x.com")

    def test_put_missing_loan(self):
        response = self.client.put(
            f"/loans/{ObjectId()}",
            json={"title": "t", "interestRate": 1, "maxLoan": 2},
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Loan not found"})

    def test_patch_merges_fields(self):
        loan_id = self._create()
        response = self.client.patch(f"/loans/{loan_id}", json={"category": "education"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["matchedCount"], 1)
        loan = self.client.get(f"/loans/{loan_id}").json()
        self.assertEqual(loan["category"], "education")
        self.assertEqual(loan["title"], "Seed capital")

    def test_patch_missing_loan_creates_nothing(self):
        self._create()
        response = self.client.patch(f"/loans/{ObjectId()}", json={"title": "ghost"})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["matchedCount"], 0)
        self.assertEqual(len(self.store.loans.docs), 1)

    def test_patch_empty_body(self):
        loan_id = self._create()
        response = self.client.patch(f"/loans/{loan_id}", json={})
        self.assertEqual(response.status_code, 400)

    def test_delete(self):
        loan_id = self._create()
        response = self.client.delete(f"/loans/{loan_id}")
        self.assertEqual(response.json(), {"acknowledged": True, "deletedCount": 1})
        again = self.client.delete(f"/loans/{loan_id}")
        self.assertEqual(again.status_code, 404)
        self.assertEqual(again.json()["deletedCount"], 0)


if __name__ == "__main__":
    unittest.main()
