"""Tests for task template storage and the /task-templates endpoints."""

import unittest

from app.schemas.task_template import TaskTemplateWrite
from app.services import task_templates as template_service
from app.services.task_templates import TaskTemplateNotFoundError
from tests.api_support import PREFIX, ApiTestCase
from tests.support import memory_session_factory


def _template(name: str = "HTTP call", **kwargs: object) -> TaskTemplateWrite:
    defaults = {
        "type": "http",
        "category": "integration",
        "default_config": {"method": "GET"},
        "config_schema": {"type": "object", "required": ["url"]},
        "version": "1.0",
    }
    defaults.update(kwargs)
    return TaskTemplateWrite(name=name, **defaults)


class TestTaskTemplateService(unittest.TestCase):

    def setUp(self) -> None:
        self.db = memory_session_factory()()

    def tearDown(self) -> None:
        self.db.close()

    def test_create_defaults_to_active(self) -> None:
        template = template_service.create_task_template(self.db, _template(), created_by="alice")
        self.assertTrue(template.is_active)
        self.assertEqual(template.created_by, "alice")
        self.assertEqual(template.default_config, {"method": "GET"})

    def test_create_inactive(self) -> None:
        template = template_service.create_task_template(
            self.db, _template(is_active=False), created_by=None
        )
        self.assertFalse(template.is_active)

    def test_filters(self) -> None:
        template_service.create_task_template(self.db, _template("a"), created_by=None)
        template_service.create_task_template(
            self.db, _template("b", type="sql", category="storage"), created_by=None
        )
        template_service.create_task_template(
            self.db, _template("c", type="sql", is_active=False), created_by=None
        )
        names = lambda items: [t.name for t in items]  # noqa: E731
        self.assertEqual(names(template_service.list_task_templates(self.db)), ["a", "b", "c"])
        self.assertEqual(names(template_service.list_task_templates(self.db, type_="sql")), ["b", "c"])
        self.assertEqual(
            names(template_service.list_task_templates(self.db, category="integration")), ["a", "c"]
        )
        self.assertEqual(
            names(template_service.list_task_templates(self.db, active_only=True)), ["a", "b"]
        )

    def test_update_keeps_active_flag_when_omitted(self) -> None:
        created = template_service.create_task_template(
            self.db, _template(is_active=False), created_by=None
        )
        updated = template_service.update_task_template(
            self.db, created.id, _template("Renamed", version="2.0")
        )
        self.assertEqual(updated.name, "Renamed")
        self.assertEqual(updated.version, "2.0")
        self.assertFalse(updated.is_active)

    def test_missing_template(self) -> None:
        with self.assertRaises(TaskTemplateNotFoundError):
            template_service.get_task_template(self.db, "missing")
        with self.assertRaises(TaskTemplateNotFoundError):
            template_service.update_task_template(self.db, "missing", _template())
        self.assertFalse(template_service.delete_task_template(self.db, "missing"))


class TestTaskTemplateEndpoints(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.headers = self.auth_headers("alice")

    def test_crud_cycle(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/task-templates",
            headers=self.headers,
            json={"name": "HTTP call", "type": "http", "metadata": {"icon": "globe"}},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        created = resp.json()
        self.assertTrue(created["is_active"])
        self.assertEqual(created["created_by"], "alice")
        self.assertEqual(created["metadata"], {"icon": "globe"})

        resp = self.client.get(f"{PREFIX}/task-templates?type=http&active=true", headers=self.headers)
        self.assertEqual([t["id"] for t in resp.json()], [created["id"]])
        resp = self.client.get(f"{PREFIX}/task-templates?category=storage", headers=self.headers)
        self.assertEqual(resp.json(), [])

        resp = self.client.put(
            f"{PREFIX}/task-templates/{created['id']}",
            headers=self.headers,
            json={"name": "HTTP request", "is_active": False},
        )
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["is_active"])

        resp = self.client.delete(f"{PREFIX}/task-templates/{created['id']}", headers=self.headers)
        self.assertEqual(resp.status_code, 204)
        resp = self.client.get(f"{PREFIX}/task-templates/{created['id']}", headers=self.headers)
        self.assertEqual(resp.status_code, 404)

    def test_update_missing_returns_404(self) -> None:
        resp = self.client.put(
            f"{PREFIX}/task-templates/missing", headers=self.headers, json={"name": "x"}
        )
        self.assertEqual(resp.status_code, 404)


if __name__ == "__main__":
    unittest.main()
