import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LayoutState",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("user_id", models.CharField(default="anonymous", max_length=255)),
                ("context_key", models.CharField(max_length=64)),
                ("settings", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "layout_state",
                "indexes": [
                    models.Index(fields=["user_id", "context_key"], name="layout_state_user_ctx_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user_id", "context_key"), name="unique_layout_state_per_user_context"
                    ),
                ],
            },
        ),
    ]
