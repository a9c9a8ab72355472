from __future__ import annotations

from unittest import mock

from django.test import TestCase

from apps.layout.models import LayoutState, LayoutStateQuerySet


class LayoutStateStoreTests(TestCase):
    def setUp(self) -> None:
        self.store = LayoutState.objects

    def test_get_settings_returns_none_when_missing(self) -> None:
        self.assertIsNone(self.store.get_settings("alice", "ctx"))

    def test_first_upsert_creates_row_with_partial_settings(self) -> None:
        merged = self.store.upsert("alice", "ctx", {"theme": "dark"})

        self.assertEqual(merged, {"theme": "dark"})
        row = LayoutState.objects.get(user_id="alice", context_key="ctx")
        self.assertEqual(row.settings, {"theme": "dark"})
        self.assertIsNotNone(row.id)
        self.assertIsNotNone(row.created_at)

    def test_upsert_merges_top_level_keys(self) -> None:
        self.store.upsert("alice", "ctx", {"theme": "dark", "left_width": 320})
        merged = self.store.upsert("alice", "ctx", {"left_width": 400})

        self.assertEqual(merged, {"theme": "dark", "left_width": 400})
        self.assertEqual(self.store.get_settings("alice", "ctx"), {"theme": "dark", "left_width": 400})

    def test_nested_objects_are_replaced_not_deep_merged(self) -> None:
        self.store.upsert("alice", "ctx", {"panels": {"a": 1, "b": 2}, "theme": "light"})
        merged = self.store.upsert("alice", "ctx", {"panels": {"c": 3}})

        self.assertEqual(merged, {"panels": {"c": 3}, "theme": "light"})

    def test_repeated_write_is_idempotent(self) -> None:
        once = self.store.upsert("alice", "ctx", {"left_sidebar_open": False})
        twice = self.store.upsert("alice", "ctx", {"left_sidebar_open": False})

        self.assertEqual(once, twice)
        self.assertEqual(LayoutState.objects.filter(user_id="alice").count(), 1)

    def test_update_keeps_id_and_created_at_and_refreshes_updated_at(self) -> None:
        self.store.upsert("alice", "ctx", {"theme": "dark"})
        before = LayoutState.objects.get(user_id="alice", context_key="ctx")

        self.store.upsert("alice", "ctx", {"theme": "light"})
        after = LayoutState.objects.get(user_id="alice", context_key="ctx")

        self.assertEqual(after.id, before.id)
        self.assertEqual(after.created_at, before.created_at)
        self.assertGreaterEqual(after.updated_at, before.updated_at)

    def test_rows_are_partitioned_by_user_and_context(self) -> None:
        self.store.upsert("alice", "ctx-1", {"theme": "dark"})
        self.store.upsert("bob", "ctx-1", {"theme": "light"})
        self.store.upsert("alice", "ctx-2", {"left_width": 500})

        self.assertEqual(self.store.get_settings("alice", "ctx-1"), {"theme": "dark"})
        self.assertEqual(self.store.get_settings("bob", "ctx-1"), {"theme": "light"})
        self.assertEqual(self.store.get_settings("alice", "ctx-2"), {"left_width": 500})
        self.assertEqual(LayoutState.objects.count(), 3)

    def test_empty_partial_creates_empty_document(self) -> None:
        self.assertEqual(self.store.upsert("alice", "ctx", {}), {})
        self.assertEqual(self.store.get_settings("alice", "ctx"), {})

    def test_non_mapping_partial_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            self.store.upsert("alice", "ctx", ["theme", "dark"])  # type: ignore[arg-type]
        self.assertFalse(LayoutState.objects.exists())

    def test_lost_insert_race_merges_into_existing_row(self) -> None:
        # Another writer inserted the row between our lookup and our insert.
        LayoutState.objects.create(user_id="alice", context_key="ctx", settings={"theme": "dark"})

        with mock.patch.object(LayoutStateQuerySet, "first", return_value=None):
            merged = self.store.upsert("alice", "ctx", {"left_width": 400})

        self.assertEqual(merged, {"theme": "dark", "left_width": 400})
        self.assertEqual(LayoutState.objects.count(), 1)
