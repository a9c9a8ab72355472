from __future__ import annotations

import json
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase

from apps.layout.helpers.context import context_key
from apps.layout.models import LayoutState


class ShowLayoutStateCommandTests(TestCase):
    def _run(self, *args: str) -> str:
        out = StringIO()
        call_command("show_layout_state", *args, stdout=out)
        return out.getvalue()

    def test_prints_stored_settings(self) -> None:
        LayoutState.objects.upsert("alice", context_key("/", "mobile"), {"theme": "dark"})

        output = self._run("--user", "alice", "--path", "/", "--device", "mobile")

        self.assertEqual(json.loads(output), {"theme": "dark"})

    def test_prints_empty_object_for_unknown_context(self) -> None:
        self.assertEqual(json.loads(self._run("--path", "/nowhere")), {})

    def test_blank_path_is_an_error(self) -> None:
        with self.assertRaises(CommandError):
            self._run("--path", " ")
