from __future__ import annotations

from django.contrib import admin
from django.core.exceptions import ValidationError
from django.test import RequestFactory, TestCase

from apps.layout.models import LayoutState


class LayoutStateSettingsValidationTests(TestCase):
    def setUp(self) -> None:
        self.row = LayoutState.objects.create(user_id="alice", context_key="ctx", settings={"theme": "dark"})
        self.request = RequestFactory().get("/admin/layout/layoutstate/")
        self.model_admin = admin.site._registry[LayoutState]

    def _admin_form(self, settings_text: str):
        form_class = self.model_admin.get_form(self.request, self.row)
        return form_class(data={"settings": settings_text}, instance=self.row)

    def test_admin_rejects_non_object_settings(self) -> None:
        for text in ("[1, 2]", '"dark"', "42", "true"):
            with self.subTest(text=text):
                form = self._admin_form(text)
                self.assertFalse(form.is_valid())
                self.assertIn("settings", form.errors)

        self.row.refresh_from_db()
        self.assertEqual(self.row.settings, {"theme": "dark"})

    def test_admin_accepts_object_settings(self) -> None:
        form = self._admin_form('{"theme": "light", "left_width": 300}')
        self.assertTrue(form.is_valid(), form.errors)
        form.save()

        self.assertEqual(
            LayoutState.objects.get_settings("alice", "ctx"), {"theme": "light", "left_width": 300}
        )

    def test_full_clean_rejects_list_settings(self) -> None:
        self.row.settings = [1, 2]
        with self.assertRaises(ValidationError) as ctx:
            self.row.full_clean()
        self.assertIn("settings", ctx.exception.message_dict)
