"""Unit tests for taskflow.services.validation: registration, task payloads, filters, roles."""

import itertools
import unittest
from datetime import date

from taskflow.services.validation import (
    parse_due_date,
    validate_query_filters,
    validate_registration,
    validate_role,
    validate_task_create,
    validate_task_update,
)


def _registration(password: str) -> dict:
    return {"name": "Ann", "email": "a@x.com", "password": password}


class TestRegistrationPresence(unittest.TestCase):
    """Every one of name, email, password is required."""

    def test_missing_fields(self) -> None:
        for missing in ("name", "email", "password"):
            data = _registration("Passw0rd")
            data.pop(missing)
            self.assertEqual(validate_registration(data), "All fields are required")

    def test_empty_string_counts_as_missing(self) -> None:
        data = _registration("Passw0rd")
        data["email"] = ""
        self.assertEqual(validate_registration(data), "All fields are required")

    def test_blank_name_or_email_counts_as_missing(self) -> None:
        for field in ("name", "email"):
            with self.subTest(field=field):
                data = _registration("Passw0rd")
                data[field] = "   "
                self.assertEqual(validate_registration(data), "All fields are required")


class TestRegistrationPasswordRules(unittest.TestCase):
    """A password passes iff it is long enough and has upper, lower and digit."""

    def test_valid_password(self) -> None:
        self.assertIsNone(validate_registration(_registration("Passw0rd")))

    def test_messages_in_rule_order(self) -> None:
        cases = {
            "Pa0": "Password must be at least 8 characters long",
            "passw0rdpass": "Password must contain at least one uppercase letter",
            "PASSW0RDPASS": "Password must contain at least one lowercase letter",
            "Passwordpass": "Password must contain at least one digit",
        }
        for password, message in cases.items():
            with self.subTest(password=password):
                self.assertEqual(validate_registration(_registration(password)), message)

    def test_every_combination_of_rules(self) -> None:
        pieces = {"upper": "QWER", "lower": "asdf", "digit": "1234"}
        for upper, lower, digit in itertools.product((False, True), repeat=3):
            for long_enough in (False, True):
                chosen = [
                    pieces[name]
                    for name, flag in (("upper", upper), ("lower", lower), ("digit", digit))
                    if flag
                ]
                password = "".join(chosen) or "!!!!"
                password = (password * 3) if long_enough else password[:7]
                # Truncating may drop a class; recompute what the password really contains.
                has_upper = any(c.isupper() for c in password)
                has_lower = any(c.islower() for c in password)
                has_digit = any(c.isdigit() for c in password)
                ok = len(password) >= 8 and has_upper and has_lower and has_digit
                with self.subTest(password=password):
                    result = validate_registration(_registration(password))
                    if ok:
                        self.assertIsNone(result)
                    else:
                        self.assertIsNotNone(result)


class TestTaskCreate(unittest.TestCase):
    def test_minimal_valid(self) -> None:
        self.assertIsNone(validate_task_create({"title": "Ship"}))

    def test_title_required(self) -> None:
        self.assertEqual(validate_task_create({}), "Title is required")
        self.assertEqual(validate_task_create({"title": "   "}), "Title is required")

    def test_title_length(self) -> None:
        self.assertIsNone(validate_task_create({"title": "x" * 200}))
        self.assertEqual(
            validate_task_create({"title": "x" * 201}),
            "Title must not exceed 200 characters",
        )

    def test_status_and_priority_enums(self) -> None:
        self.assertEqual(
            validate_task_create({"title": "t", "status": "done"}),
            "Status must be one of: pending, in_progress, completed",
        )
        self.assertEqual(
            validate_task_create({"title": "t", "priority": "urgent"}),
            "Priority must be one of: low, medium, high",
        )
        self.assertIsNone(
            validate_task_create({"title": "t", "status": "in_progress", "priority": "high"})
        )

    def test_due_date(self) -> None:
        self.assertIsNone(validate_task_create({"title": "t", "due_date": "2025-12-31"}))
        self.assertIsNone(
            validate_task_create({"title": "t", "due_date": "2025-12-31T10:00:00Z"})
        )
        self.assertEqual(
            validate_task_create({"title": "t", "due_date": "next tuesday"}),
            "Invalid due date format",
        )

    def test_title_checked_before_status(self) -> None:
        self.assertEqual(
            validate_task_create({"title": "", "status": "bogus"}), "Title is required"
        )


class TestTaskUpdate(unittest.TestCase):
    """Partial update: absent fields are not validated."""

    def test_empty_payload_is_valid(self) -> None:
        self.assertIsNone(validate_task_update({}))

    def test_empty_title_rejected(self) -> None:
        self.assertEqual(validate_task_update({"title": "  "}), "Title cannot be empty")
        self.assertEqual(validate_task_update({"title": None}), "Title cannot be empty")

    def test_null_status_rejected(self) -> None:
        self.assertIsNotNone(validate_task_update({"status": None}))
        self.assertIsNotNone(validate_task_update({"priority": None}))

    def test_valid_status_only(self) -> None:
        self.assertIsNone(validate_task_update({"status": "completed"}))

    def test_null_due_date_clears(self) -> None:
        self.assertIsNone(validate_task_update({"due_date": None}))


class TestQueryFilters(unittest.TestCase):
    def test_valid_and_absent(self) -> None:
        self.assertIsNone(validate_query_filters({}))
        self.assertIsNone(validate_query_filters({"status": "pending", "priority": "low"}))

    def test_invalid(self) -> None:
        self.assertEqual(
            validate_query_filters({"status": "open"}),
            "Invalid status filter. Must be one of: pending, in_progress, completed",
        )
        self.assertEqual(
            validate_query_filters({"priority": "urgent"}),
            "Invalid priority filter. Must be one of: low, medium, high",
        )


class TestRoleAndDates(unittest.TestCase):
    def test_role(self) -> None:
        self.assertEqual(validate_role(None), "Role is required")
        self.assertEqual(validate_role("root"), 'Invalid role. Must be "user" or "admin"')
        self.assertIsNone(validate_role("admin"))
        self.assertIsNone(validate_role("user"))

    def test_parse_due_date(self) -> None:
        self.assertIsNone(parse_due_date(None))
        self.assertIsNone(parse_due_date(""))
        self.assertEqual(parse_due_date("2025-01-02"), date(2025, 1, 2))
        self.assertEqual(parse_due_date("2025-01-02T23:00:00+00:00"), date(2025, 1, 2))
        with self.assertRaises(ValueError):
            parse_due_date("2025-13-40")


if __name__ == "__main__":
    unittest.main()
